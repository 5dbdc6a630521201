"""Tests for health endpoint."""

import time

from todos_api import __version__
from todos_api.api.health import format_uptime


def test_health_check_success(client):
    """Test successful health check response."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "healthy"
    assert data["version"] == __version__
    assert isinstance(data["uptime"], str)
    assert isinstance(data["timestamp"], str)
    assert data["todo_count"] == 2


def test_health_check_tracks_todo_count(client):
    client.post("/api/todos", json={"title": "Stretch"})

    assert client.get("/health").json()["todo_count"] == 3


def test_uptime_format():
    """Test uptime format is correct."""
    uptime = format_uptime(time.time() - (86400 + 3600 + 60 + 1))

    assert uptime == "1d 1h 1m 1s"
