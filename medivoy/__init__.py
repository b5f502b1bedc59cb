"""Medivoy care-journey lifecycle core.

Public entry points for collaborators (HTTP layer, workers, dashboard).
"""

from medivoy.domain.cost_estimation import MAX_ADDONS_ALLOWED, estimate
from medivoy.domain.notification_eligibility import is_eligible, is_quiet_hours
from medivoy.domain.status_registry import StatusRegistry, default_registry
from medivoy.domain.statuses import EntityKind
from medivoy.domain.transitions import allowed_transitions, assert_transition, can_transition
from medivoy.domain.workflow import WorkflowStep, next_step, previous_step, step_metadata

__version__ = "1.0.0"

__all__ = [
    "MAX_ADDONS_ALLOWED",
    "EntityKind",
    "StatusRegistry",
    "WorkflowStep",
    "allowed_transitions",
    "assert_transition",
    "can_transition",
    "default_registry",
    "estimate",
    "is_eligible",
    "is_quiet_hours",
    "next_step",
    "previous_step",
    "step_metadata",
]
