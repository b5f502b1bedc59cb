"""Tests for building and querying status registries."""

from types import MappingProxyType

import pytest

from medivoy.core.exceptions import InvalidStateError
from medivoy.domain.status_registry import BOOKING_TRANSITIONS, StatusRegistry, default_registry
from medivoy.domain.statuses import BookingStatus, EntityKind
from medivoy.domain.transitions import can_transition


class TestDefaultRegistry:
    def test_covers_every_entity_kind(self):
        assert set(default_registry.kinds) == set(EntityKind)

    def test_tables_are_read_only(self):
        table = default_registry.table(EntityKind.BOOKING)
        assert isinstance(table, MappingProxyType)
        with pytest.raises(TypeError):
            table[BookingStatus.COMPLETED] = frozenset({BookingStatus.PENDING})

    def test_destination_sets_are_frozen(self):
        allowed = default_registry.allowed(EntityKind.BOOKING, "pending")
        assert isinstance(allowed, frozenset)

    def test_source_tables_do_not_leak_into_registry(self):
        registry = StatusRegistry()
        assert registry.allowed(EntityKind.BOOKING, "completed") == frozenset()
        assert BOOKING_TRANSITIONS[BookingStatus.COMPLETED] == set()

    def test_initial_statuses(self):
        assert default_registry.initial_status(EntityKind.APPOINTMENT).value == "requested"
        assert default_registry.initial_status(EntityKind.PRESCRIPTION).value == "draft"


class TestCustomRegistry:
    def test_override_table_for_one_kind(self):
        tables = {
            EntityKind.BOOKING: {
                "pending": {"confirmed", "pending"},
                "confirmed": {"in_progress", "cancelled"},
                "in_progress": {"completed"},
                "completed": set(),
                "cancelled": {"pending"},
                "on_hold": set(),
            }
        }
        # on_hold is unreachable from pending in this table
        with pytest.raises(ValueError, match="unreachable"):
            StatusRegistry(tables)

    def test_override_allows_self_listed_transition(self):
        tables = {
            EntityKind.BOOKING: {
                "pending": {"confirmed", "pending", "on_hold"},
                "confirmed": {"in_progress", "cancelled"},
                "in_progress": {"completed"},
                "completed": set(),
                "cancelled": {"pending"},
                "on_hold": {"pending"},
            }
        }
        registry = StatusRegistry(tables)

        assert can_transition(EntityKind.BOOKING, "pending", "pending", registry) is True
        assert can_transition(EntityKind.BOOKING, "cancelled", "pending", registry) is True
        assert can_transition(EntityKind.BOOKING, "cancelled", "pending") is False

    def test_kind_without_table_is_invalid(self):
        registry = StatusRegistry({EntityKind.BOOKING: BOOKING_TRANSITIONS})

        with pytest.raises(InvalidStateError):
            can_transition(EntityKind.PAYMENT, "pending", "completed", registry)

    def test_missing_status_rejected(self):
        tables = {EntityKind.BOOKING: {"pending": {"confirmed"}, "confirmed": set()}}

        with pytest.raises(ValueError, match="missing statuses"):
            StatusRegistry(tables)

    def test_unknown_destination_rejected(self):
        tables = {
            EntityKind.BOOKING: {
                **{status: set() for status in BookingStatus},
                BookingStatus.PENDING: {"archived"},
            }
        }

        with pytest.raises(ValueError, match="unknown status"):
            StatusRegistry(tables)
