"""FastAPI application setup and routing for the Todos API."""

import logging
import sys
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import health, metrics, todos
from .config import Config
from .metrics import MetricsCollector, endpoint_label
from .models import NewTodo, TodoUpdate
from .seed import initial_todos
from .store import TodoNotFoundError, TodoStore

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Request bodies read as raw JSON, so FastAPI does not collect these itself
_DOCUMENTED_BODIES = (NewTodo, TodoUpdate)


def create_app(config: Optional[Config] = None, store: Optional[TodoStore] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Service configuration, read from the environment when omitted
        store: Todo store to serve, seeded from ``config`` when omitted

    Returns:
        Configured application owning exactly one store
    """
    if config is None:
        config = Config.from_env()

    app = FastAPI(
        title="Todos API (Demo)",
        description="A minimal todo API documented with OpenAPI.",
        version=API_VERSION,
        docs_url="/docs",
        openapi_url="/docs/openapi.json",
        redoc_url="/redoc",
        servers=[{"url": config.public_url, "description": "Local dev"}],
    )

    app.state.config = config
    app.state.store = store if store is not None else TodoStore(initial_todos(config))
    app.state.metrics_collector = MetricsCollector()

    if config.cors_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Middleware for metrics collection
    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)

        duration = time.perf_counter() - start_time
        endpoint = endpoint_label(request)
        success = response.status_code < 400

        app.state.metrics_collector.record_api_request(endpoint, duration, success)

        return response

    @app.exception_handler(TodoNotFoundError)
    async def todo_not_found_handler(request: Request, exc: TodoNotFoundError) -> JSONResponse:
        logger.debug(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=404, content={"message": "Not found"})

    app.include_router(todos.router, prefix="/api", tags=["Todos"])
    app.include_router(health.router, tags=["health"])
    app.include_router(metrics.router, tags=["monitoring"])

    def openapi() -> Dict[str, Any]:
        if app.openapi_schema is None:
            schema = FastAPI.openapi(app)
            schemas = schema.setdefault("components", {}).setdefault("schemas", {})
            for model in _DOCUMENTED_BODIES:
                schemas[model.__name__] = model.model_json_schema(
                    ref_template="#/components/schemas/{model}"
                )
        return app.openapi_schema

    app.openapi = openapi

    return app


app = create_app()


def main():
    """Entry point for the todos-api command."""
    import uvicorn

    config = app.state.config

    logging.basicConfig(
        level=config.logging_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info(f"API running on {config.public_url}")
    logger.info(f"Docs at {config.public_url}/docs")

    try:
        uvicorn.run(
            "todos_api.api.server:app",
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            reload=False,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Server startup failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
