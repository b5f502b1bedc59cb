"""
Shared pytest fixtures for all tests.

Provides in-memory collaborators (status store, catalog, dispatcher), sample
preferences and an async SQLite session factory for the store integration
tests.
"""

import os
from collections.abc import AsyncGenerator
from datetime import time
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

from medivoy.database import get_session_factory, init_db  # noqa: E402
from medivoy.schemas.cost import AddOn, AddOnCategory  # noqa: E402
from medivoy.schemas.notification import (  # noqa: E402
    NotificationChannel,
    NotificationPreference,
    NotificationType,
)
from medivoy.services.status_store import InMemoryStatusStore  # noqa: E402


# ============================================================================
# COLLABORATOR FAKES
# ============================================================================


class RecordingDispatcher:
    """Dispatcher that records every send."""

    def __init__(self) -> None:
        self.sent: list[tuple[NotificationChannel, NotificationType, dict[str, Any]]] = []

    async def send(
        self,
        channel: NotificationChannel,
        notification_type: NotificationType,
        payload: dict[str, Any],
    ) -> None:
        self.sent.append((channel, notification_type, payload))


class StaticCatalog:
    """Catalog backed by plain dictionaries."""

    def __init__(self, packages: dict[str, Decimal], add_ons: list[AddOn]) -> None:
        self.packages = packages
        self.add_ons = add_ons

    async def base_price(self, package_id: str) -> Decimal | None:
        return self.packages.get(package_id)

    async def add_on_catalog(self) -> list[AddOn]:
        return list(self.add_ons)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def status_store() -> InMemoryStatusStore:
    return InMemoryStatusStore()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def catalog() -> StaticCatalog:
    return StaticCatalog(
        packages={"knee-replacement": Decimal("10000"), "dental-basic": Decimal("2500")},
        add_ons=[
            AddOn(id="flight", category=AddOnCategory.TRAVEL, price=Decimal("500")),
            AddOn(id="hotel", category=AddOnCategory.ACCOMMODATION, price=Decimal("300")),
            AddOn(id="visa", category=AddOnCategory.VISA, price=Decimal("120.50")),
            AddOn(id="companion", category=AddOnCategory.TRAVELER, price=Decimal("200")),
        ],
    )


@pytest.fixture
def quiet_night_preference() -> NotificationPreference:
    """Quiet hours 22:00-07:00 on every day, urgent override on."""
    return NotificationPreference(
        quiet_hours_enabled=True,
        quiet_hours_start=time(22, 0),
        quiet_hours_end=time(7, 0),
        quiet_hours_days=["mon", "tue", "wed", "thu", "fri", "sat", "sun"],
        urgent_always_enabled=True,
    )


@pytest.fixture
def sample_add_ons() -> list[AddOn]:
    return [
        AddOn(id="a1", category=AddOnCategory.TRAVEL, price=Decimal("500")),
        AddOn(id="a2", category=AddOnCategory.ACCOMMODATION, price=Decimal("300")),
    ]


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Async session factory over a fresh SQLite database file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'lifecycle.db'}")
    await init_db(engine)
    yield get_session_factory(engine)
    await engine.dispose()
