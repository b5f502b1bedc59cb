"""Notification service.

Checks each (channel, type) pair against the user's preferences and hands
eligible notifications to the dispatcher. Delivery itself (Firebase,
SendGrid, Twilio) belongs to the dispatcher implementation.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any, Protocol

from medivoy.config import settings
from medivoy.domain.notification_eligibility import is_eligible
from medivoy.schemas.notification import NotificationChannel, NotificationPreference, NotificationType

logger = logging.getLogger(__name__)


class NotificationDispatcher(Protocol):
    """Delivery interface consumed by the notification service."""

    async def send(
        self,
        channel: NotificationChannel,
        notification_type: NotificationType,
        payload: dict[str, Any],
    ) -> None: ...


class NotificationService:
    """Service for sending notifications that the user has opted into."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        urgent_types: Iterable[str | NotificationType] | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        types = settings.urgent_notification_types if urgent_types is None else urgent_types
        self.urgent_types = frozenset(NotificationType(t) for t in types)

    async def notify(
        self,
        pref: NotificationPreference,
        channel: str | NotificationChannel,
        notification_type: str | NotificationType,
        payload: dict[str, Any],
        now: datetime | None = None,
    ) -> bool:
        """Send one notification if the user's preferences allow it now.

        Args:
            pref: User notification preferences
            channel: Delivery channel
            notification_type: Notification type
            payload: Data handed to the dispatcher
            now: Current time; defaults to the wall clock

        Returns:
            bool: True if the notification was dispatched
        """
        now = now or datetime.now(UTC)
        channel = NotificationChannel(channel)
        notification_type = NotificationType(notification_type)

        if not is_eligible(pref, channel, notification_type, now, self.urgent_types):
            logger.debug(f"Suppressed {notification_type.value} notification on {channel.value}")
            return False

        await self.dispatcher.send(channel, notification_type, payload)
        logger.info(f"Dispatched {notification_type.value} notification on {channel.value}")
        return True

    async def notify_all_channels(
        self,
        pref: NotificationPreference,
        notification_type: str | NotificationType,
        payload: dict[str, Any],
        now: datetime | None = None,
        channels: Iterable[str | NotificationChannel] | None = None,
    ) -> list[NotificationChannel]:
        """Send on every eligible channel.

        Returns:
            list[NotificationChannel]: Channels the notification went out on
        """
        now = now or datetime.now(UTC)
        sent = []
        for channel in channels if channels is not None else NotificationChannel:
            if await self.notify(pref, channel, notification_type, payload, now):
                sent.append(NotificationChannel(channel))
        return sent
