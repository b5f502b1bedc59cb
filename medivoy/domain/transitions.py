"""Generic status transition validator.

One validator serves every entity kind; the behaviour comes entirely from the
registry's tables. Callers persist a new status only after a successful check.
"""

from enum import Enum

from medivoy.core.exceptions import TransitionDeniedError
from medivoy.domain.status_registry import StatusRegistry, default_registry
from medivoy.domain.statuses import STATUS_DISPLAY, STATUS_FLOWS, EntityKind

CANCELLED = "cancelled"


def can_transition(
    kind: str | EntityKind,
    current: str | Enum,
    target: str | Enum,
    registry: StatusRegistry = default_registry,
) -> bool:
    """Check whether ``kind`` may move from ``current`` to ``target``.

    Args:
        kind: Entity kind whose table applies
        current: Current status
        target: Requested status
        registry: Transition tables to consult

    Returns:
        bool: True iff ``target`` is listed for ``current``

    Raises:
        InvalidStateError: If kind, current or target is unknown
    """
    resolved_target = registry.resolve_status(kind, target)
    return resolved_target in registry.allowed(kind, current)


def assert_transition(
    kind: str | EntityKind,
    current: str | Enum,
    target: str | Enum,
    registry: StatusRegistry = default_registry,
) -> None:
    """Validate a status transition.

    Raises:
        InvalidStateError: If kind, current or target is unknown
        TransitionDeniedError: If the transition is not allowed
    """
    if not can_transition(kind, current, target, registry):
        resolved_kind = registry.resolve_kind(kind)
        raise TransitionDeniedError(
            resolved_kind.value,
            registry.resolve_status(kind, current).value,
            registry.resolve_status(kind, target).value,
        )


def allowed_transitions(
    kind: str | EntityKind,
    current: str | Enum,
    registry: StatusRegistry = default_registry,
) -> frozenset[Enum]:
    return registry.allowed(kind, current)


def is_terminal(
    kind: str | EntityKind,
    status: str | Enum,
    registry: StatusRegistry = default_registry,
) -> bool:
    """Check if no transition leaves ``status``."""
    return registry.is_terminal(kind, status)


def can_cancel(
    kind: str | EntityKind,
    status: str | Enum,
    registry: StatusRegistry = default_registry,
) -> bool:
    """Check if the entity can move to ``cancelled`` from ``status``."""
    enum_cls = registry.status_enum(kind)
    if CANCELLED not in {member.value for member in enum_cls}:
        return False
    return can_transition(kind, status, CANCELLED, registry)


def status_label(
    kind: str | EntityKind,
    status: str | Enum,
    registry: StatusRegistry = default_registry,
) -> str:
    resolved = registry.resolve_status(kind, status)
    display = STATUS_DISPLAY.get(registry.resolve_kind(kind), {})
    return display.get(resolved.value, (resolved.value, ""))[0]


def status_description(
    kind: str | EntityKind,
    status: str | Enum,
    registry: StatusRegistry = default_registry,
) -> str:
    resolved = registry.resolve_status(kind, status)
    display = STATUS_DISPLAY.get(registry.resolve_kind(kind), {})
    return display.get(resolved.value, (resolved.value, ""))[1]


def status_progress(
    kind: str | EntityKind,
    status: str | Enum,
    registry: StatusRegistry = default_registry,
) -> int:
    """Percentage of the kind's happy path covered at ``status``.

    Returns:
        int: 0-100, 0 for statuses off the happy path
    """
    resolved = registry.resolve_status(kind, status)
    flow = STATUS_FLOWS.get(registry.resolve_kind(kind), ())
    if resolved not in flow:
        return 0
    return int((flow.index(resolved) + 1) * 100 / len(flow) + 0.5)
