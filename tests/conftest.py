"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.bl_common.database import get_db_session
from src.bl_gateway.rate_limit import purchase_rate_limit
from src.main import app


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
async def client(db_session: AsyncMock) -> AsyncClient:
    """Async HTTP client over the ASGI app; DB session and rate limiter overridden."""

    async def _db():
        yield db_session

    async def _no_limit() -> None:
        return None

    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[purchase_rate_limit] = _no_limit
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
