"""Pydantic request/response models for the Todos API."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class Todo(BaseModel):
    """Todo response model."""

    id: int = Field(..., description="Unique todo identifier", examples=[3])
    title: str = Field(..., description="Todo title", examples=["Refill coffee beans"])
    done: bool = Field(..., description="Whether the todo is completed", examples=[False])


class NewTodo(BaseModel):
    """Request model for creating a todo."""

    title: Optional[str] = Field(
        None, description="Todo title, defaults to 'Untitled'", examples=["Stretch break"]
    )


class TodoUpdate(BaseModel):
    """Request model for partially updating a todo."""

    title: Optional[str] = Field(None, description="New title")
    done: Optional[bool] = Field(None, description="New completion state")


class ErrorMessage(BaseModel):
    """Error response body."""

    message: str = Field(..., description="Error message", examples=["Not found"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="Service version")
    uptime: str = Field(..., description="Service uptime in human readable format")
    timestamp: datetime = Field(..., description="Current timestamp")
    todo_count: int = Field(..., description="Number of todos currently held")


class MetricsResponse(BaseModel):
    """Request and todo activity counters."""

    requests_total: int = Field(0, description="Requests served")
    average_response_time_ms: float = Field(0.0, description="Mean response time")
    errors_by_endpoint: Dict[str, int] = Field(
        default_factory=dict, description="Responses with status >= 400, by endpoint"
    )
    todos_created: int = Field(0, description="Todos created since startup")
    todos_updated: int = Field(0, description="Todos updated since startup")
    todos_deleted: int = Field(0, description="Todos deleted since startup")
