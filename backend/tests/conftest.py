"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.config import Settings, get_settings
from src.main import app
from src.services.workflow_service import WorkflowService


@pytest.fixture()
def settings() -> Settings:
    """Development settings with default business rule thresholds."""
    return Settings(environment="development")


@pytest.fixture()
def now() -> datetime:
    """Fixed reference time for date rules."""
    return datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def service(settings: Settings) -> WorkflowService:
    return WorkflowService(settings)


@pytest.fixture()
def future() -> str:
    """ISO timestamp safely ahead of the wall clock, for API payloads."""
    return (datetime.now(UTC) + timedelta(days=30)).isoformat()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client against the ASGI app.

    Yields:
        AsyncClient configured for testing
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    get_settings.cache_clear()
