"""Pytest configuration and fixtures for unified search.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. All imports use app.*.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE_BACKEND", "local")

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import get_settings
from app.main import app
from tests.helpers import FakeSession

get_settings.cache_clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Clears dependency overrides after."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory() -> Callable[..., Callable[[], FakeSession]]:
    """Build a session factory that hands out the given FakeSessions in order."""

    def _make(*sessions: FakeSession) -> Callable[[], FakeSession]:
        queue = list(sessions)

        def factory() -> FakeSession:
            return queue.pop(0)

        return factory

    return _make
