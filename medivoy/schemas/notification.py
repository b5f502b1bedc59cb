"""Notification preference Pydantic schemas."""

from datetime import time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    WHATSAPP = "whatsapp"


class NotificationType(str, Enum):
    BOOKING_UPDATES = "booking_updates"
    PAYMENT_REMINDERS = "payment_reminders"
    APPOINTMENT_REMINDERS = "appointment_reminders"
    PROMOTIONS = "promotions"
    NEWSLETTERS = "newsletters"
    MESSAGES = "messages"
    EMERGENCY_ALERTS = "emergency_alerts"


class Weekday(str, Enum):
    """Three-letter weekday codes, Monday first (matches ``date.weekday()``)."""

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        return list(cls)[index]


class NotificationPreference(BaseModel):
    """Per-user notification settings.

    Field names follow ``{channel}_{type}``; a ``{channel}_notifications``
    field is the master switch for that channel. Original camelCase keys
    (``smsPromotions``, ``quietHoursStart``) are accepted as aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    # Email
    email_notifications: bool = True
    email_booking_updates: bool = True
    email_payment_reminders: bool = True
    email_appointment_reminders: bool = True
    email_promotions: bool = False
    email_newsletters: bool = False

    # SMS
    sms_notifications: bool = True
    sms_booking_updates: bool = True
    sms_appointment_reminders: bool = True
    sms_payment_reminders: bool = True
    sms_promotions: bool = False

    # Push
    push_notifications: bool = True
    push_booking_updates: bool = True
    push_appointment_reminders: bool = True
    push_messages: bool = True

    # WhatsApp
    whatsapp_notifications: bool = True
    whatsapp_booking_updates: bool = True
    whatsapp_appointment_reminders: bool = True

    # Quiet hours
    quiet_hours_enabled: bool = False
    quiet_hours_start: time | None = None
    quiet_hours_end: time | None = None
    quiet_hours_days: list[Weekday] = Field(default_factory=list)

    # Special settings
    urgent_always_enabled: bool = True
    emergency_alerts: bool = True
    time_zone_for_notifications: str | None = None

    @field_validator("quiet_hours_days", mode="before")
    @classmethod
    def normalize_days(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, (list, tuple, set)):
            return [d.strip().lower()[:3] if isinstance(d, str) else d for d in v]
        return v

    def channel_enabled(self, channel: NotificationChannel) -> bool:
        """Master switch for ``channel``."""
        return bool(getattr(self, f"{NotificationChannel(channel).value}_notifications"))

    def type_flag(self, channel: NotificationChannel, notification_type: NotificationType) -> bool | None:
        """Flag for a (channel, type) pair.

        Falls back to a channel-independent flag of the same name (e.g.
        ``emergency_alerts``).

        Returns:
            bool | None: The flag, or None if the pair has no setting
        """
        channel = NotificationChannel(channel)
        notification_type = NotificationType(notification_type)
        for field in (f"{channel.value}_{notification_type.value}", notification_type.value):
            if field in type(self).model_fields:
                return bool(getattr(self, field))
        return None
