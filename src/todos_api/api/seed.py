"""Loading of the initial todo collection."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, PositiveInt, TypeAdapter, ValidationError

from .config import Config
from .store import DEFAULT_TITLE, TodoRecord, default_seed

logger = logging.getLogger(__name__)


class SeedTodo(BaseModel):
    """One entry of a seed file."""

    id: PositiveInt
    title: str = DEFAULT_TITLE
    done: bool = False


_seed_adapter = TypeAdapter(List[SeedTodo])


def load_seed_file(seed_file: Union[str, Path]) -> List[TodoRecord]:
    """Load todos from a JSON seed file.

    Args:
        seed_file: Path to a JSON array of ``{"id", "title", "done"}`` objects

    Returns:
        Records in file order

    Raises:
        ValueError: If the file cannot be read or its contents are invalid
    """
    seed_path = Path(seed_file)
    try:
        with open(seed_path, "r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in seed file {seed_path}: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Error reading seed file {seed_path}: {exc}") from exc

    try:
        entries = _seed_adapter.validate_python(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid todos in seed file {seed_path}: {exc}") from exc

    seen = set()
    for entry in entries:
        if entry.id in seen:
            raise ValueError(f"Duplicate todo id {entry.id} in seed file {seed_path}")
        seen.add(entry.id)

    return [TodoRecord(id=entry.id, title=entry.title, done=entry.done) for entry in entries]


def initial_todos(config: Optional[Config] = None) -> List[TodoRecord]:
    """Resolve the records a new store starts with."""
    if config is not None and config.seed_file is not None:
        records = load_seed_file(config.seed_file)
        logger.info(f"Loaded {len(records)} todos from {config.seed_file}")
        return records
    if config is not None and not config.seed_defaults:
        return []
    return default_seed()
