"""Test fixtures for the Tourbook backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("APP_ENV", "test")
os.environ.pop("REDIS_URL", None)

from tourbook.core.config import get_settings
from tourbook.core.settings import PricingSettings, get_pricing_settings
from tourbook.main import app
from tourbook.services import catalog_service, confirmation_store
from tourbook.services.catalog_service import ListingKind, ListingRef


@pytest.fixture(autouse=True)
def _clear_confirmations() -> Iterator[None]:
    """Keep the in-memory confirmation store isolated per test."""
    confirmation_store.clear()
    yield
    confirmation_store.clear()


@pytest.fixture()
def settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Patch environment variables and rebuild cached settings around a test."""
    get_settings.cache_clear()
    catalog_service.get_catalog.cache_clear()
    yield monkeypatch
    monkeypatch.undo()
    get_settings.cache_clear()
    catalog_service.get_catalog.cache_clear()


@pytest.fixture()
def rates() -> PricingSettings:
    """Default fee, tax and tier configuration."""
    return get_pricing_settings()


@pytest.fixture()
def cabin() -> ListingRef:
    return ListingRef(
        id="test-cabin",
        kind=ListingKind.PROPERTY,
        name="Cabaña de Prueba",
        nightly_rate=Decimal("100000"),
        max_guests=4,
        location="Jardín, Antioquia",
    )


@pytest_asyncio.fixture()
async def client() -> AsyncIterator[AsyncClient]:
    """Yield an async client bound to the application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
