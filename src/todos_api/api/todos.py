"""Todo collection endpoints."""

import json
import logging
import math
from typing import Any, Dict, List, Optional, Type

from fastapi import APIRouter, Depends, Path, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing_extensions import Annotated

from .metrics import MetricsCollector, get_metrics_collector
from .models import ErrorMessage, NewTodo, Todo, TodoUpdate
from .store import TodoNotFoundError, TodoPatch, TodoStore

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_RESPONSE = {404: {"model": ErrorMessage, "description": "Not found"}}

TodoId = Annotated[
    str,
    Path(
        description="Numeric ID of the todo",
        json_schema_extra={"type": "integer"},
    ),
]


def get_store(request: Request) -> TodoStore:
    """Get the todo store owned by the running app."""
    return request.app.state.store


def parse_todo_id(raw: str) -> Optional[int]:
    """Coerce a path segment to a todo id.

    Follows JavaScript ``Number()`` coercion: surrounding whitespace is
    ignored, an empty segment is 0, ``"2.0"`` is 2 and ``"0x10"`` is 16.
    Returns None when the segment is not an integral number.
    """
    text = raw.strip()
    if not text:
        return 0
    if "_" in text or not text.isascii():
        return None
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            return int(text, 0)
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def _lookup_id(raw: str) -> int:
    todo_id = parse_todo_id(raw)
    if todo_id is None:
        raise TodoNotFoundError(raw)
    return todo_id


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} in JSON body")


def _finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"Number {text} out of range in JSON body")
    return number


async def read_json_object(request: Request) -> Dict[str, Any]:
    """Read the request body as a JSON object.

    Missing, malformed or non-object bodies read as an empty object. Bodies
    holding NaN, Infinity or numbers that overflow a float are malformed.
    """
    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        logger.warning(f"Ignoring malformed JSON body on {request.method} {request.url.path}")
        return {}
    if not isinstance(payload, dict):
        return {}
    return payload


def json_request_body(model: Type[BaseModel]) -> Dict[str, Any]:
    """OpenAPI request body entry for handlers that read raw JSON."""
    return {
        "requestBody": {
            "required": False,
            "content": {
                "application/json": {
                    "schema": {"$ref": f"#/components/schemas/{model.__name__}"}
                }
            },
        }
    }


@router.get("/todos", response_model=List[Todo], summary="List all todos")
async def list_todos(store: TodoStore = Depends(get_store)) -> JSONResponse:
    """Return every todo in insertion order."""
    return JSONResponse([todo.to_dict() for todo in store.list()])


@router.get(
    "/todos/{todo_id}",
    response_model=Todo,
    responses=NOT_FOUND_RESPONSE,
    summary="Get a single todo",
)
async def get_todo(todo_id: TodoId, store: TodoStore = Depends(get_store)) -> JSONResponse:
    """Return one todo by id."""
    return JSONResponse(store.get(_lookup_id(todo_id)).to_dict())


@router.post(
    "/todos",
    response_model=Todo,
    status_code=201,
    summary="Create a new todo",
    openapi_extra=json_request_body(NewTodo),
)
async def create_todo(
    request: Request,
    store: TodoStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> JSONResponse:
    """
    Create a todo.

    A missing or empty title becomes "Untitled". New todos start not done.
    """
    payload = await read_json_object(request)
    todo = store.create(payload.get("title"))
    metrics.record_todo_created()
    logger.info(f"Created todo {todo.id}")
    return JSONResponse(todo.to_dict(), status_code=201)


@router.patch(
    "/todos/{todo_id}",
    response_model=Todo,
    responses=NOT_FOUND_RESPONSE,
    summary="Update fields on a todo",
    openapi_extra=json_request_body(TodoUpdate),
)
async def update_todo(
    todo_id: TodoId,
    request: Request,
    store: TodoStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> JSONResponse:
    """
    Update a todo.

    Only ``title`` and ``done`` are applied; other fields, ``id`` included,
    are ignored.
    """
    lookup_id = _lookup_id(todo_id)
    patch = TodoPatch.from_payload(await read_json_object(request))
    todo = store.update(lookup_id, patch)
    metrics.record_todo_updated()
    logger.info(f"Updated todo {todo.id}: {sorted(patch.changes())}")
    return JSONResponse(todo.to_dict())


@router.delete(
    "/todos/{todo_id}",
    status_code=204,
    response_class=Response,
    responses={204: {"description": "Deleted"}, **NOT_FOUND_RESPONSE},
    summary="Remove a todo",
)
async def delete_todo(
    todo_id: TodoId,
    store: TodoStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> Response:
    """Delete a todo."""
    lookup_id = _lookup_id(todo_id)
    store.delete(lookup_id)
    metrics.record_todo_deleted()
    logger.info(f"Deleted todo {lookup_id}")
    return Response(status_code=204)
