"""Status transition tables and the immutable registry built from them.

States per kind:
- booking: pending → confirmed → in_progress → completed, with on_hold
  and cancelled side branches
- appointment: requested → pending_confirmation → confirmed → reminded →
  checked_in → in_progress → completed
- expert_call: pending → scheduled → reminder_sent → ongoing → completed;
  cancelled and no_show calls can be rescheduled
- payment: pending → processing → completed → refunded
- prescription: draft → issued → (partially_)filled → dispensed
"""

from collections import deque
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from medivoy.core.exceptions import InvalidStateError
from medivoy.domain.statuses import (
    INITIAL_STATUSES,
    STATUS_ENUMS,
    AppointmentStatus,
    BookingStatus,
    EntityKind,
    ExpertCallStatus,
    PaymentStatus,
    PrescriptionStatus,
)

BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.ON_HOLD, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.IN_PROGRESS, BookingStatus.ON_HOLD, BookingStatus.CANCELLED},
    BookingStatus.ON_HOLD: {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.IN_PROGRESS: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}

APPOINTMENT_TRANSITIONS: dict[AppointmentStatus, set[AppointmentStatus]] = {
    AppointmentStatus.REQUESTED: {AppointmentStatus.PENDING_CONFIRMATION, AppointmentStatus.CANCELLED},
    AppointmentStatus.PENDING_CONFIRMATION: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {
        AppointmentStatus.REMINDED,
        AppointmentStatus.CHECKED_IN,
        AppointmentStatus.RESCHEDULED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
        AppointmentStatus.MISSED,
    },
    AppointmentStatus.REMINDED: {
        AppointmentStatus.CHECKED_IN,
        AppointmentStatus.RESCHEDULED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
        AppointmentStatus.MISSED,
    },
    AppointmentStatus.CHECKED_IN: {AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED},
    AppointmentStatus.IN_PROGRESS: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED},
    AppointmentStatus.COMPLETED: set(),
    AppointmentStatus.CANCELLED: set(),
    AppointmentStatus.RESCHEDULED: {AppointmentStatus.PENDING_CONFIRMATION},
    AppointmentStatus.NO_SHOW: {AppointmentStatus.RESCHEDULED},
    AppointmentStatus.MISSED: {AppointmentStatus.RESCHEDULED},
}

EXPERT_CALL_TRANSITIONS: dict[ExpertCallStatus, set[ExpertCallStatus]] = {
    ExpertCallStatus.PENDING: {ExpertCallStatus.SCHEDULED, ExpertCallStatus.CANCELLED},
    ExpertCallStatus.SCHEDULED: {
        ExpertCallStatus.REMINDER_SENT,
        ExpertCallStatus.ONGOING,
        ExpertCallStatus.RESCHEDULED,
        ExpertCallStatus.CANCELLED,
        ExpertCallStatus.NO_SHOW,
    },
    ExpertCallStatus.REMINDER_SENT: {
        ExpertCallStatus.ONGOING,
        ExpertCallStatus.RESCHEDULED,
        ExpertCallStatus.CANCELLED,
        ExpertCallStatus.NO_SHOW,
    },
    ExpertCallStatus.ONGOING: {ExpertCallStatus.COMPLETED, ExpertCallStatus.CANCELLED},
    ExpertCallStatus.COMPLETED: set(),
    ExpertCallStatus.CANCELLED: {ExpertCallStatus.RESCHEDULED},  # Reactivation
    ExpertCallStatus.RESCHEDULED: {ExpertCallStatus.SCHEDULED},
    ExpertCallStatus.NO_SHOW: {ExpertCallStatus.RESCHEDULED},
}

PAYMENT_TRANSITIONS: dict[PaymentStatus, set[PaymentStatus]] = {
    PaymentStatus.PENDING: {
        PaymentStatus.PROCESSING,
        PaymentStatus.COMPLETED,
        PaymentStatus.FAILED,
        PaymentStatus.CANCELLED,
    },
    PaymentStatus.PROCESSING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED},
    PaymentStatus.COMPLETED: {PaymentStatus.REFUNDED},
    PaymentStatus.FAILED: set(),
    PaymentStatus.CANCELLED: set(),
    PaymentStatus.REFUNDED: set(),
}

PRESCRIPTION_TRANSITIONS: dict[PrescriptionStatus, set[PrescriptionStatus]] = {
    PrescriptionStatus.DRAFT: {PrescriptionStatus.ISSUED, PrescriptionStatus.CANCELLED},
    PrescriptionStatus.ISSUED: {
        PrescriptionStatus.PARTIALLY_FILLED,
        PrescriptionStatus.FILLED,
        PrescriptionStatus.EXPIRED,
        PrescriptionStatus.CANCELLED,
    },
    PrescriptionStatus.PARTIALLY_FILLED: {
        PrescriptionStatus.FILLED,
        PrescriptionStatus.EXPIRED,
        PrescriptionStatus.CANCELLED,
    },
    PrescriptionStatus.FILLED: {PrescriptionStatus.DISPENSED, PrescriptionStatus.EXPIRED},
    PrescriptionStatus.DISPENSED: set(),
    PrescriptionStatus.EXPIRED: set(),
    PrescriptionStatus.CANCELLED: set(),
}

DEFAULT_TRANSITION_TABLES: dict[EntityKind, Mapping[Enum, Iterable[Enum]]] = {
    EntityKind.BOOKING: BOOKING_TRANSITIONS,
    EntityKind.APPOINTMENT: APPOINTMENT_TRANSITIONS,
    EntityKind.EXPERT_CALL: EXPERT_CALL_TRANSITIONS,
    EntityKind.PAYMENT: PAYMENT_TRANSITIONS,
    EntityKind.PRESCRIPTION: PRESCRIPTION_TRANSITIONS,
}


def _unreachable(table: Mapping[Enum, frozenset[Enum]], initial: Enum) -> set[Enum]:
    """Return statuses that cannot be reached from ``initial``."""
    seen = {initial}
    queue = deque([initial])
    while queue:
        for target in table[queue.popleft()]:
            if target not in seen:
                seen.add(target)
                queue.append(target)
    return set(table) - seen


class StatusRegistry:
    """Immutable per-kind transition tables.

    Built once and shared; every table is checked on construction so a
    registry that exists is always exhaustive, closed and fully reachable.
    Pass a custom ``tables`` mapping to override tables (e.g. per tenant).
    """

    def __init__(
        self,
        tables: Mapping[EntityKind, Mapping[Enum, Iterable[Enum]]] | None = None,
        status_enums: Mapping[EntityKind, type[Enum]] | None = None,
        initial_statuses: Mapping[EntityKind, Enum] | None = None,
    ) -> None:
        tables = DEFAULT_TRANSITION_TABLES if tables is None else tables
        status_enums = STATUS_ENUMS if status_enums is None else status_enums
        initial_statuses = INITIAL_STATUSES if initial_statuses is None else initial_statuses

        frozen: dict[EntityKind, Mapping[Enum, frozenset[Enum]]] = {}
        for kind, table in tables.items():
            kind = EntityKind(kind)
            enum_cls = status_enums[kind]
            try:
                built = {
                    enum_cls(source): frozenset(enum_cls(target) for target in targets)
                    for source, targets in table.items()
                }
            except ValueError as exc:
                raise ValueError(f"Transition table for {kind.value} has an unknown status: {exc}") from exc

            missing = set(enum_cls) - set(built)
            if missing:
                names = sorted(s.value for s in missing)
                raise ValueError(f"Transition table for {kind.value} is missing statuses: {names}")

            initial = enum_cls(initial_statuses[kind])
            unreachable = _unreachable(built, initial)
            if unreachable:
                names = sorted(s.value for s in unreachable)
                raise ValueError(
                    f"Transition table for {kind.value} has statuses unreachable from "
                    f"{initial.value}: {names}"
                )
            frozen[kind] = MappingProxyType(built)

        self._tables: Mapping[EntityKind, Mapping[Enum, frozenset[Enum]]] = MappingProxyType(frozen)
        self._enums = MappingProxyType({kind: status_enums[kind] for kind in frozen})
        self._initial = MappingProxyType(
            {kind: status_enums[kind](initial_statuses[kind]) for kind in frozen}
        )

    @property
    def kinds(self) -> tuple[EntityKind, ...]:
        return tuple(self._tables)

    def resolve_kind(self, kind: str | EntityKind) -> EntityKind:
        """Coerce ``kind`` to a registered EntityKind.

        Raises:
            InvalidStateError: If the kind is unknown or has no table
        """
        try:
            resolved = EntityKind(kind)
        except ValueError:
            raise InvalidStateError("entity kind", kind) from None
        if resolved not in self._tables:
            raise InvalidStateError("entity kind", kind, "no transition table registered")
        return resolved

    def resolve_status(self, kind: str | EntityKind, status: str | Enum) -> Enum:
        """Coerce ``status`` to a member of ``kind``'s status enum.

        Raises:
            InvalidStateError: If the kind or status is unknown
        """
        resolved_kind = self.resolve_kind(kind)
        enum_cls = self._enums[resolved_kind]
        value = status.value if isinstance(status, Enum) else status
        try:
            return enum_cls(value)
        except ValueError:
            raise InvalidStateError(f"{resolved_kind.value} status", status) from None

    def status_enum(self, kind: str | EntityKind) -> type[Enum]:
        return self._enums[self.resolve_kind(kind)]

    def initial_status(self, kind: str | EntityKind) -> Enum:
        return self._initial[self.resolve_kind(kind)]

    def table(self, kind: str | EntityKind) -> Mapping[Enum, frozenset[Enum]]:
        """Read-only transition table for ``kind``."""
        return self._tables[self.resolve_kind(kind)]

    def allowed(self, kind: str | EntityKind, status: str | Enum) -> frozenset[Enum]:
        """Statuses reachable from ``status`` in one step."""
        resolved = self.resolve_status(kind, status)
        return self._tables[self.resolve_kind(kind)][resolved]

    def is_terminal(self, kind: str | EntityKind, status: str | Enum) -> bool:
        return not self.allowed(kind, status)


default_registry = StatusRegistry()
