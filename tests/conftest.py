"""
Shared fixtures for the payment instruction tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from payment_instructions.api.instructions.resolver import today_utc
from payment_instructions.main import app

FIXED_TODAY = "2025-06-15"


@pytest.fixture
def today() -> str:
    """A pinned 'today' so scheduling tests do not depend on the clock."""
    return FIXED_TODAY


@pytest.fixture
def usd_accounts() -> list[dict]:
    return [
        {"id": "N90394", "balance": 1000, "currency": "USD"},
        {"id": "N9122", "balance": 500, "currency": "USD"},
    ]


@pytest.fixture
def override_today():
    app.dependency_overrides[today_utc] = lambda: FIXED_TODAY
    yield
    app.dependency_overrides.pop(today_utc, None)


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
