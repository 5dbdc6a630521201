"""Service configuration management for the Todos API."""

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Config(BaseSettings):
    """Todos API configuration."""

    model_config = {"env_prefix": "TODOS_API_", "env_file": ".env", "case_sensitive": False}

    host: str = Field(default="0.0.0.0", description="API host address")
    port: int = Field(default=3000, description="API port")
    log_level: str = Field(default="INFO", description="Logging level")

    seed_file: Optional[Path] = Field(
        default=None, description="JSON file with the todos to start with"
    )
    seed_defaults: bool = Field(
        default=True, description="Start with the demo todos when no seed file is given"
    )

    cors_allowed_origins: List[str] = Field(
        default_factory=list, description="Origins allowed by CORS, empty disables CORS"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase for logging compatibility."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return level

    @property
    def public_url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables and .env files."""
        return cls()
