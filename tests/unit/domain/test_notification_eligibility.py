"""Tests for notification eligibility rules."""

from datetime import UTC, datetime, time

import pytest

from medivoy.core.exceptions import InvalidStateError, ValidationError
from medivoy.domain.notification_eligibility import is_eligible, is_quiet_hours
from medivoy.schemas.notification import NotificationPreference, NotificationType, Weekday

# 2026-10-19 is a Monday
MONDAY_LATE = datetime(2026, 10, 19, 23, 30)
TUESDAY_EARLY = datetime(2026, 10, 20, 6, 59)
TUESDAY_MORNING = datetime(2026, 10, 20, 7, 0)
MONDAY_NOON = datetime(2026, 10, 19, 12, 0)


class TestChannelAndTypeFlags:
    def test_promotions_disabled_on_sms(self):
        pref = NotificationPreference.model_validate({"smsNotifications": True, "smsPromotions": False})

        assert is_eligible(pref, "sms", "promotions", MONDAY_NOON) is False

    def test_explicit_false_wins_even_outside_quiet_hours(self, quiet_night_preference):
        pref = quiet_night_preference.model_copy(update={"sms_promotions": False})

        assert is_eligible(pref, "sms", "promotions", MONDAY_NOON) is False
        assert is_eligible(pref, "sms", "promotions", MONDAY_LATE) is False

    def test_channel_master_switch_off(self):
        pref = NotificationPreference(email_notifications=False, email_booking_updates=True)

        assert is_eligible(pref, "email", "booking_updates", MONDAY_NOON) is False

    def test_channel_off_blocks_urgent_too(self):
        pref = NotificationPreference(push_notifications=False)

        assert is_eligible(pref, "push", NotificationType.EMERGENCY_ALERTS, MONDAY_NOON) is False

    def test_pair_without_flag_is_allowed(self):
        pref = NotificationPreference()

        # There is no whatsapp_payment_reminders setting
        assert is_eligible(pref, "whatsapp", "payment_reminders", MONDAY_NOON) is True

    def test_enabled_pair(self):
        assert is_eligible(NotificationPreference(), "email", "booking_updates", MONDAY_NOON) is True

    def test_unknown_channel_or_type(self):
        pref = NotificationPreference()

        with pytest.raises(InvalidStateError):
            is_eligible(pref, "fax", "booking_updates", MONDAY_NOON)
        with pytest.raises(InvalidStateError):
            is_eligible(pref, "sms", "birthday", MONDAY_NOON)


class TestQuietHours:
    def test_non_urgent_suppressed_at_night(self, quiet_night_preference):
        assert is_eligible(quiet_night_preference, "sms", "booking_updates", MONDAY_LATE) is False

    def test_urgent_bypasses_quiet_hours(self, quiet_night_preference):
        assert is_eligible(quiet_night_preference, "sms", "emergency_alerts", MONDAY_LATE) is True

    def test_urgent_suppressed_without_override(self, quiet_night_preference):
        pref = quiet_night_preference.model_copy(update={"urgent_always_enabled": False})

        assert is_eligible(pref, "sms", "emergency_alerts", MONDAY_LATE) is False

    def test_custom_urgent_types(self, quiet_night_preference):
        urgent = {NotificationType.APPOINTMENT_REMINDERS}

        assert is_eligible(quiet_night_preference, "sms", "appointment_reminders", MONDAY_LATE, urgent) is True
        assert is_eligible(quiet_night_preference, "sms", "emergency_alerts", MONDAY_LATE, urgent) is False

    def test_window_wraps_midnight(self, quiet_night_preference):
        assert is_quiet_hours(quiet_night_preference, TUESDAY_EARLY) is True
        assert is_quiet_hours(quiet_night_preference, TUESDAY_MORNING) is False
        assert is_quiet_hours(quiet_night_preference, MONDAY_NOON) is False
        assert is_quiet_hours(quiet_night_preference, datetime(2026, 10, 19, 22, 0)) is True

    def test_after_midnight_uses_day_window_started(self):
        pref = NotificationPreference(
            quiet_hours_enabled=True,
            quiet_hours_start=time(22, 0),
            quiet_hours_end=time(7, 0),
            quiet_hours_days=[Weekday.MON],
        )

        # Tuesday 06:59 belongs to Monday night's window
        assert is_quiet_hours(pref, TUESDAY_EARLY) is True
        # Tuesday 23:30 starts a Tuesday window, which is not configured
        assert is_quiet_hours(pref, datetime(2026, 10, 20, 23, 30)) is False

    def test_same_day_window(self):
        pref = NotificationPreference(
            quiet_hours_enabled=True,
            quiet_hours_start=time(12, 0),
            quiet_hours_end=time(14, 0),
            quiet_hours_days=["Monday"],
        )

        assert is_quiet_hours(pref, MONDAY_NOON) is True
        assert is_quiet_hours(pref, datetime(2026, 10, 19, 14, 0)) is False
        assert is_quiet_hours(pref, datetime(2026, 10, 20, 12, 30)) is False

    def test_empty_day_list_means_no_quiet_hours(self):
        pref = NotificationPreference(
            quiet_hours_enabled=True,
            quiet_hours_start=time(22, 0),
            quiet_hours_end=time(7, 0),
            quiet_hours_days=[],
        )

        assert is_quiet_hours(pref, MONDAY_LATE) is False
        assert is_quiet_hours(pref, TUESDAY_EARLY) is False
        assert is_eligible(pref, "sms", "booking_updates", MONDAY_LATE) is True

    def test_end_bound_is_exclusive(self, quiet_night_preference):
        assert is_quiet_hours(quiet_night_preference, datetime(2026, 10, 20, 6, 59, 59)) is True
        assert is_quiet_hours(quiet_night_preference, TUESDAY_MORNING) is False

    def test_disabled_or_incomplete_window(self, quiet_night_preference):
        assert is_quiet_hours(quiet_night_preference.model_copy(update={"quiet_hours_enabled": False}), MONDAY_LATE) is False
        assert is_quiet_hours(quiet_night_preference.model_copy(update={"quiet_hours_end": None}), MONDAY_LATE) is False
        assert is_quiet_hours(
            quiet_night_preference.model_copy(update={"quiet_hours_end": time(22, 0)}), MONDAY_LATE
        ) is False

    def test_timezone_conversion(self):
        pref = NotificationPreference(
            quiet_hours_enabled=True,
            quiet_hours_start=time(22, 0),
            quiet_hours_end=time(7, 0),
            quiet_hours_days=["mon"],
            time_zone_for_notifications="Asia/Kolkata",
        )
        # 17:00 UTC is 22:30 in Kolkata
        now = datetime(2026, 10, 19, 17, 0, tzinfo=UTC)

        assert is_quiet_hours(pref, now) is True
        assert is_eligible(pref, "email", "booking_updates", now) is False

    def test_unknown_timezone(self):
        pref = NotificationPreference(
            quiet_hours_enabled=True,
            quiet_hours_start=time(22, 0),
            quiet_hours_end=time(7, 0),
            time_zone_for_notifications="Mars/Olympus",
        )

        with pytest.raises(ValidationError):
            is_quiet_hours(pref, datetime(2026, 10, 19, 17, 0, tzinfo=UTC))

    def test_camel_case_quiet_hours_keys(self):
        pref = NotificationPreference.model_validate(
            {
                "quietHoursEnabled": True,
                "quietHoursStart": "22:00",
                "quietHoursEnd": "07:00",
                "quietHoursDays": ["mon", "tue"],
                "urgentAlwaysEnabled": True,
            }
        )

        assert is_eligible(pref, "push", "messages", MONDAY_LATE) is False
        assert is_eligible(pref, "push", "emergency_alerts", MONDAY_LATE) is True
