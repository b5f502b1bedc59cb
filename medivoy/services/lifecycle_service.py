"""Entity lifecycle service.

Applies status transitions through the registry and a ``StatusStore``:

1. load current status and version
2. validate the edge (denied transitions are never retried)
3. store with the loaded version as the expected version
4. on a version conflict, reload and try again, up to ``max_attempts``
5. optionally notify the user on every eligible channel
"""

import logging
from datetime import UTC, datetime

from medivoy.config import settings
from medivoy.core.exceptions import ConcurrentModificationError
from medivoy.domain.status_registry import StatusRegistry, default_registry
from medivoy.domain.statuses import EntityKind
from medivoy.domain.transitions import assert_transition, can_transition
from medivoy.schemas.lifecycle import TransitionRequest, TransitionResult
from medivoy.schemas.notification import NotificationPreference, NotificationType
from medivoy.services.notification_service import NotificationService
from medivoy.services.status_store import StatusStore

logger = logging.getLogger(__name__)

NOTIFICATION_TYPE_BY_KIND: dict[EntityKind, NotificationType] = {
    EntityKind.BOOKING: NotificationType.BOOKING_UPDATES,
    EntityKind.APPOINTMENT: NotificationType.APPOINTMENT_REMINDERS,
    EntityKind.EXPERT_CALL: NotificationType.APPOINTMENT_REMINDERS,
    EntityKind.PAYMENT: NotificationType.PAYMENT_REMINDERS,
    EntityKind.PRESCRIPTION: NotificationType.BOOKING_UPDATES,
}


class LifecycleService:
    """Service for moving entities between statuses."""

    def __init__(
        self,
        store: StatusStore,
        registry: StatusRegistry = default_registry,
        notification_service: NotificationService | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.store = store
        self.registry = registry
        self.notification_service = notification_service
        if max_attempts is None:
            max_attempts = settings.transition_max_attempts
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts

    async def apply(
        self,
        request: TransitionRequest,
        preference: NotificationPreference | None = None,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Apply a status change described by a ``TransitionRequest``."""
        return await self.transition(request.kind, request.entity_id, request.target_status, preference, now)

    async def can_transition(self, kind: str | EntityKind, entity_id: str, target: str) -> bool:
        """Check against the stored status whether ``target`` is reachable now."""
        resolved_kind = self.registry.resolve_kind(kind)
        state = await self.store.load(resolved_kind, entity_id)
        return can_transition(resolved_kind, state.status, target, self.registry)

    async def transition(
        self,
        kind: str | EntityKind,
        entity_id: str,
        target: str,
        preference: NotificationPreference | None = None,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Move an entity to ``target``.

        Args:
            kind: Entity kind
            entity_id: Entity identifier
            target: Requested status
            preference: User preferences; when given, the user is notified
            now: Current time for notification checks; defaults to the wall clock

        Returns:
            TransitionResult: Previous and new status with the new version

        Raises:
            InvalidStateError: If kind or target is unknown
            TransitionDeniedError: If the edge is not allowed
            NotFoundError: If the entity has no stored status
            ConcurrentModificationError: If every attempt lost a version race
        """
        resolved_kind = self.registry.resolve_kind(kind)
        target_status = self.registry.resolve_status(resolved_kind, target).value

        attempt = 0
        while True:
            attempt += 1
            state = await self.store.load(resolved_kind, entity_id)
            assert_transition(resolved_kind, state.status, target_status, self.registry)
            try:
                new_state = await self.store.store(resolved_kind, entity_id, target_status, state.version)
                break
            except ConcurrentModificationError:
                if attempt >= self.max_attempts:
                    logger.error(
                        f"Giving up {resolved_kind.value} {entity_id} → {target_status} "
                        f"after {attempt} attempts"
                    )
                    raise
                logger.warning(
                    f"Retrying {resolved_kind.value} {entity_id} → {target_status} "
                    f"(attempt {attempt} of {self.max_attempts})"
                )

        logger.info(
            f"{resolved_kind.value} {entity_id}: {state.status} → {new_state.status} "
            f"(version {new_state.version})"
        )

        now = now or datetime.now(UTC)
        notified = []
        if preference is not None and self.notification_service is not None:
            channels = await self.notification_service.notify_all_channels(
                preference,
                NOTIFICATION_TYPE_BY_KIND[resolved_kind],
                {
                    "kind": resolved_kind.value,
                    "entity_id": entity_id,
                    "previous_status": state.status,
                    "status": new_state.status,
                },
                now,
            )
            notified = [channel.value for channel in channels]

        return TransitionResult(
            kind=resolved_kind,
            entity_id=entity_id,
            previous_status=state.status,
            status=new_state.status,
            version=new_state.version,
            attempts=attempt,
            notified_channels=notified,
            transitioned_at=now,
        )
