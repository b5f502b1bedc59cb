"""Notification eligibility rules.

A notification may be sent on a channel when, in order:
1. the channel's master switch is on,
2. the (channel, type) flag is not explicitly off,
3. urgent types bypass quiet hours when ``urgent_always_enabled`` is set,
4. otherwise nothing is sent inside the quiet-hours window.

The current time is always passed in; nothing here reads the clock.
"""

from collections.abc import Collection
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from medivoy.core.exceptions import InvalidStateError, ValidationError
from medivoy.schemas.notification import (
    NotificationChannel,
    NotificationPreference,
    NotificationType,
    Weekday,
)

DEFAULT_URGENT_TYPES: frozenset[NotificationType] = frozenset({NotificationType.EMERGENCY_ALERTS})


def _resolve_channel(channel: str | NotificationChannel) -> NotificationChannel:
    try:
        return NotificationChannel(channel)
    except ValueError:
        raise InvalidStateError("notification channel", channel) from None


def _resolve_type(notification_type: str | NotificationType) -> NotificationType:
    try:
        return NotificationType(notification_type)
    except ValueError:
        raise InvalidStateError("notification type", notification_type) from None


def _local_time(pref: NotificationPreference, now: datetime) -> datetime:
    """Express ``now`` in the user's notification timezone when both are known."""
    if not pref.time_zone_for_notifications or now.tzinfo is None:
        return now
    try:
        zone = ZoneInfo(pref.time_zone_for_notifications)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(
            f"Unknown notification timezone: {pref.time_zone_for_notifications}"
        ) from None
    return now.astimezone(zone)


def is_quiet_hours(pref: NotificationPreference, now: datetime) -> bool:
    """Check if ``now`` falls inside the user's quiet hours.

    Windows may wrap past midnight (22:00-07:00); the start is inclusive and
    the end exclusive. For a wrapping window the configured day is the day on
    which the window started. Quiet hours apply only on listed days, so an
    empty day list means no quiet hours.

    Args:
        pref: User notification preferences
        now: Current time

    Returns:
        bool: True if non-urgent notifications must be held back
    """
    start, end = pref.quiet_hours_start, pref.quiet_hours_end
    if not pref.quiet_hours_enabled or start is None or end is None or start == end:
        return False

    local = _local_time(pref, now)
    current = local.time().replace(tzinfo=None)
    start, end = start.replace(tzinfo=None), end.replace(tzinfo=None)
    weekday = local.weekday()

    if start < end:
        if not start <= current < end:
            return False
    elif current >= start:
        pass
    elif current < end:
        weekday = (weekday - 1) % 7
    else:
        return False

    return Weekday.from_index(weekday) in pref.quiet_hours_days


def is_eligible(
    pref: NotificationPreference,
    channel: str | NotificationChannel,
    notification_type: str | NotificationType,
    now: datetime,
    urgent_types: Collection[NotificationType] = DEFAULT_URGENT_TYPES,
) -> bool:
    """Decide whether a notification may be sent now.

    Args:
        pref: User notification preferences
        channel: Delivery channel
        notification_type: Notification type
        now: Current time
        urgent_types: Types that bypass quiet hours

    Returns:
        bool: True if the notification may be dispatched

    Raises:
        InvalidStateError: If channel or type is unknown
    """
    channel = _resolve_channel(channel)
    notification_type = _resolve_type(notification_type)

    if not pref.channel_enabled(channel):
        return False

    if pref.type_flag(channel, notification_type) is False:
        return False

    if pref.urgent_always_enabled and notification_type in urgent_types:
        return True

    if is_quiet_hours(pref, now):
        return False

    return True
