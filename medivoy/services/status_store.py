"""Entity status persistence with optimistic concurrency.

Every store is a compare-and-swap: the new status is written only when the
stored version still equals the version the caller loaded. A mismatch raises
``ConcurrentModificationError``; the caller reloads and retries.
"""

import asyncio
import logging
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import func

from medivoy.core.exceptions import ConcurrentModificationError, NotFoundError, ValidationError
from medivoy.domain.status_registry import StatusRegistry, default_registry
from medivoy.domain.statuses import EntityKind
from medivoy.models.entity_status import EntityStatusRecord
from medivoy.schemas.lifecycle import EntityState

logger = logging.getLogger(__name__)


class StatusStore(Protocol):
    """Persistence interface consumed by the lifecycle service."""

    async def load(self, kind: EntityKind, entity_id: str) -> EntityState: ...

    async def store(
        self,
        kind: EntityKind,
        entity_id: str,
        new_status: str,
        expected_version: int,
    ) -> EntityState: ...


class InMemoryStatusStore:
    """In-memory status store.

    Suitable for tests and single-process tools; production uses
    ``SqlAlchemyStatusStore``.
    """

    def __init__(self, registry: StatusRegistry = default_registry) -> None:
        self.registry = registry
        self._states: dict[tuple[str, str], EntityState] = {}
        self._lock = asyncio.Lock()

    async def create(self, kind: EntityKind, entity_id: str, status: str) -> EntityState:
        status = self.registry.resolve_status(kind, status).value
        key = (self.registry.resolve_kind(kind).value, entity_id)
        async with self._lock:
            if key in self._states:
                raise ValidationError(f"{key[0]} '{entity_id}' already has a status")
            state = EntityState(status=status, version=1)
            self._states[key] = state
            return state

    async def load(self, kind: EntityKind, entity_id: str) -> EntityState:
        state = self._states.get((EntityKind(kind).value, entity_id))
        if state is None:
            raise NotFoundError(EntityKind(kind).value, entity_id)
        return state

    async def store(
        self,
        kind: EntityKind,
        entity_id: str,
        new_status: str,
        expected_version: int,
    ) -> EntityState:
        key = (EntityKind(kind).value, entity_id)
        async with self._lock:
            current = self._states.get(key)
            if current is None:
                raise NotFoundError(key[0], entity_id)
            if current.version != expected_version:
                raise ConcurrentModificationError(key[0], entity_id, expected_version, current.version)
            state = EntityState(status=new_status, version=current.version + 1)
            self._states[key] = state
            return state


class SqlAlchemyStatusStore:
    """Status store backed by the ``entity_statuses`` table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        registry: StatusRegistry = default_registry,
    ) -> None:
        self.session_factory = session_factory
        self.registry = registry

    async def create(self, kind: EntityKind, entity_id: str, status: str) -> EntityState:
        """Insert the first status for an entity at version 1.

        Raises:
            InvalidStateError: If the kind or status is unknown
            ValidationError: If the entity already has a status
        """
        status = self.registry.resolve_status(kind, status).value
        kind_value = self.registry.resolve_kind(kind).value
        async with self.session_factory() as db:
            db.add(EntityStatusRecord(entity_kind=kind_value, entity_id=entity_id, status=status, version=1))
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise ValidationError(f"{kind_value} '{entity_id}' already has a status") from None
        return EntityState(status=status, version=1)

    async def load(self, kind: EntityKind, entity_id: str) -> EntityState:
        kind_value = EntityKind(kind).value
        async with self.session_factory() as db:
            result = await db.execute(
                select(EntityStatusRecord).where(
                    EntityStatusRecord.entity_kind == kind_value,
                    EntityStatusRecord.entity_id == entity_id,
                )
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError(kind_value, entity_id)
            return EntityState.model_validate(record)

    async def store(
        self,
        kind: EntityKind,
        entity_id: str,
        new_status: str,
        expected_version: int,
    ) -> EntityState:
        """Write ``new_status`` if the row is still at ``expected_version``.

        Raises:
            NotFoundError: If the entity has no status row
            ConcurrentModificationError: If the version moved on
        """
        kind_value = EntityKind(kind).value
        async with self.session_factory() as db:
            result = await db.execute(
                update(EntityStatusRecord)
                .where(
                    EntityStatusRecord.entity_kind == kind_value,
                    EntityStatusRecord.entity_id == entity_id,
                    EntityStatusRecord.version == expected_version,
                )
                .values(
                    status=new_status,
                    version=EntityStatusRecord.version + 1,
                    updated_at=func.now(),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 1:
                await db.commit()
                return EntityState(status=new_status, version=expected_version + 1)

            await db.rollback()
            current = await db.execute(
                select(EntityStatusRecord.version).where(
                    EntityStatusRecord.entity_kind == kind_value,
                    EntityStatusRecord.entity_id == entity_id,
                )
            )
            actual_version = current.scalar_one_or_none()

        if actual_version is None:
            raise NotFoundError(kind_value, entity_id)
        logger.warning(
            f"Version conflict on {kind_value} {entity_id}: "
            f"expected={expected_version}, actual={actual_version}"
        )
        raise ConcurrentModificationError(kind_value, entity_id, expected_version, actual_version)
