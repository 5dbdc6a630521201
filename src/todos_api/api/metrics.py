"""Request and todo activity metrics for the Todos API."""

from dataclasses import dataclass, field
from threading import Lock
from typing import Dict

from fastapi import APIRouter, Request

from .models import MetricsResponse

router = APIRouter()


@dataclass
class Metrics:
    """Application metrics collection."""

    # API Metrics
    api_requests_total: int = 0
    api_response_time_total: float = 0.0
    api_errors_by_endpoint: Dict[str, int] = field(default_factory=dict)

    # Todo Metrics
    todos_created: int = 0
    todos_updated: int = 0
    todos_deleted: int = 0

    _lock: Lock = field(default_factory=Lock, init=False)


class MetricsCollector:
    """Collects and manages application metrics."""

    def __init__(self):
        self.metrics = Metrics()

    def record_api_request(self, endpoint: str, response_time: float, success: bool) -> None:
        """Record API request metrics.

        ``endpoint`` should be a route template, not a raw path, so the error
        table stays bounded by the number of routes.
        """
        with self.metrics._lock:
            self.metrics.api_requests_total += 1
            self.metrics.api_response_time_total += response_time

            if not success:
                self.metrics.api_errors_by_endpoint[endpoint] = (
                    self.metrics.api_errors_by_endpoint.get(endpoint, 0) + 1
                )

    def record_todo_created(self) -> None:
        with self.metrics._lock:
            self.metrics.todos_created += 1

    def record_todo_updated(self) -> None:
        with self.metrics._lock:
            self.metrics.todos_updated += 1

    def record_todo_deleted(self) -> None:
        with self.metrics._lock:
            self.metrics.todos_deleted += 1


    def get_summary(self) -> MetricsResponse:
        """Get metrics summary."""
        with self.metrics._lock:
            avg_response_time = (
                self.metrics.api_response_time_total / self.metrics.api_requests_total
                if self.metrics.api_requests_total
                else 0
            )

            return MetricsResponse(
                requests_total=self.metrics.api_requests_total,
                average_response_time_ms=avg_response_time * 1000,
                errors_by_endpoint=dict(self.metrics.api_errors_by_endpoint),
                todos_created=self.metrics.todos_created,
                todos_updated=self.metrics.todos_updated,
                todos_deleted=self.metrics.todos_deleted,
            )

    def reset_metrics(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self.metrics._lock:
            self.metrics = Metrics()


def endpoint_label(request: Request) -> str:
    """Label a request by method and matched route template.

    Requests that matched no route share a single label.
    """
    route = request.scope.get("route")
    path = getattr(route, "path", None) or "<unmatched>"
    return f"{request.method} {path}"


def get_metrics_collector(request: Request) -> MetricsCollector:
    """Get the metrics collector owned by the running app."""
    return request.app.state.metrics_collector


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics(request: Request) -> MetricsResponse:
    """Get request and todo activity metrics."""
    return get_metrics_collector(request).get_summary()
