"""
Global pytest fixtures for the Link Platform test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide an isolated in-memory Storage fixture for direct testing
    - Provide LinkManager / RedirectHandler fixtures wired to that Storage

Why an app factory?
    Using `create_app()` ensures each test gets fresh in-memory state,
    eliminating cross-test flakiness.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from link_platform.manager.link_manager import LinkManager
from link_platform.manager.redirect_handler import RedirectHandler
from link_platform.manager.strategies import RandomStrategy
from link_platform.storage.storage import Storage


@pytest.fixture
def storage() -> Storage:
    """Provide a fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def client(storage: Storage) -> TestClient:
    """
    Provide a TestClient over a new app instance backed by the `storage` fixture.

    Tests can reach into `storage` directly to assert persisted state.
    """
    return TestClient(create_app(storage=storage))


@pytest.fixture
def manager(storage: Storage) -> LinkManager:
    """LinkManager wired to the storage fixture with the default 6-char random strategy."""
    return LinkManager(storage=storage, code_strategy=RandomStrategy(length=6), max_attempts=5)


@pytest.fixture
def redirect_handler(storage: Storage) -> RedirectHandler:
    return RedirectHandler(storage=storage)
