import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from todos_api.api.config import Config
from todos_api.api.server import create_app
from todos_api.api.store import TodoStore, default_seed


@pytest.fixture
def store():
    """Store holding the two demo todos."""
    return TodoStore(default_seed())


@pytest.fixture
def app(store):
    return create_app(config=Config(), store=store)


@pytest.fixture
def client(app):
    return TestClient(app)
