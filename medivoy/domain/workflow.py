"""Booking-creation workflow steps.

The workflow is a fixed, total order of 11 steps with no branching:
treatment → country → city → hospital → package → add-ons → cost estimation
→ patient info → insurance → confirmation → expert-call scheduling.
"""

from collections.abc import Iterable
from enum import IntEnum

from medivoy.core.exceptions import InvalidStateError
from medivoy.schemas.workflow import StepMetadata, WorkflowProgress


class WorkflowStep(IntEnum):
    """Booking-creation workflow steps, in order."""

    TREATMENT_SELECTION = 1
    COUNTRY_SELECTION = 2
    CITY_SELECTION = 3
    HOSPITAL_SELECTION = 4
    PACKAGE_SELECTION = 5
    FEATURE_ADDON_SELECTION = 6
    COST_ESTIMATION = 7
    PATIENT_INFO_SUBMISSION = 8
    INSURANCE_SELECTION = 9
    BOOKING_CONFIRMATION = 10
    EXPERT_CALL_SCHEDULING = 11


FIRST_STEP = WorkflowStep.TREATMENT_SELECTION
LAST_STEP = WorkflowStep.EXPERT_CALL_SCHEDULING

STEP_LABELS: dict[WorkflowStep, str] = {
    WorkflowStep.TREATMENT_SELECTION: "Select Treatment",
    WorkflowStep.COUNTRY_SELECTION: "Select Country",
    WorkflowStep.CITY_SELECTION: "Select City",
    WorkflowStep.HOSPITAL_SELECTION: "Select Hospital",
    WorkflowStep.PACKAGE_SELECTION: "Select Package",
    WorkflowStep.FEATURE_ADDON_SELECTION: "Add-ons (Travel, Accommodation, Visa, Insurance, Services)",
    WorkflowStep.COST_ESTIMATION: "Cost Estimation",
    WorkflowStep.PATIENT_INFO_SUBMISSION: "Patient Information",
    WorkflowStep.INSURANCE_SELECTION: "Insurance Details",
    WorkflowStep.BOOKING_CONFIRMATION: "Confirm Booking",
    WorkflowStep.EXPERT_CALL_SCHEDULING: "Schedule Expert Call",
}

STEP_DESCRIPTIONS: dict[WorkflowStep, str] = {
    WorkflowStep.TREATMENT_SELECTION: "Choose treatment type",
    WorkflowStep.COUNTRY_SELECTION: "Choose destination country",
    WorkflowStep.CITY_SELECTION: "Choose city for treatment",
    WorkflowStep.HOSPITAL_SELECTION: "Choose hospital",
    WorkflowStep.PACKAGE_SELECTION: "Select package (base price shown)",
    WorkflowStep.FEATURE_ADDON_SELECTION: "Add optional features (max 20)",
    WorkflowStep.COST_ESTIMATION: "View cost breakdown and estimation range",
    WorkflowStep.PATIENT_INFO_SUBMISSION: "Provide your personal details",
    WorkflowStep.INSURANCE_SELECTION: "Add insurance information",
    WorkflowStep.BOOKING_CONFIRMATION: "Finalize and confirm booking",
    WorkflowStep.EXPERT_CALL_SCHEDULING: "Schedule consultation with medical expert",
}


def resolve_step(step: int | WorkflowStep) -> WorkflowStep:
    """Coerce ``step`` to a WorkflowStep.

    Raises:
        InvalidStateError: If ``step`` is outside 1..11
    """
    if isinstance(step, bool):
        raise InvalidStateError("workflow step", step)
    try:
        return WorkflowStep(step)
    except ValueError:
        raise InvalidStateError("workflow step", step) from None


def is_valid_step(step: int) -> bool:
    try:
        resolve_step(step)
    except InvalidStateError:
        return False
    return True


def next_step(current: int | WorkflowStep) -> WorkflowStep | None:
    """Step after ``current``, or None at the last step."""
    step = resolve_step(current)
    if step is LAST_STEP:
        return None
    return WorkflowStep(step + 1)


def previous_step(current: int | WorkflowStep) -> WorkflowStep | None:
    """Step before ``current``, or None at the first step."""
    step = resolve_step(current)
    if step is FIRST_STEP:
        return None
    return WorkflowStep(step - 1)


def step_metadata(step: int | WorkflowStep) -> StepMetadata:
    resolved = resolve_step(step)
    return StepMetadata(
        step=int(resolved),
        key=resolved.name.lower(),
        label=STEP_LABELS[resolved],
        description=STEP_DESCRIPTIONS[resolved],
    )


def all_steps() -> list[StepMetadata]:
    """Metadata for every step, in order."""
    return [step_metadata(step) for step in WorkflowStep]


def workflow_progress(
    current: int | WorkflowStep,
    completed_steps: Iterable[int | WorkflowStep] = (),
) -> WorkflowProgress:
    """Summarize progress through the workflow.

    Args:
        current: Step the booking is on
        completed_steps: Steps whose data has been submitted

    Returns:
        WorkflowProgress: Counts, percentage and remaining steps
    """
    current_step = resolve_step(current)
    completed = sorted({resolve_step(step) for step in completed_steps})
    remaining = [step for step in WorkflowStep if step not in completed]
    total = len(WorkflowStep)

    return WorkflowProgress(
        total_steps=total,
        current_step=int(current_step),
        completed_steps=[int(step) for step in completed],
        completed_steps_count=len(completed),
        remaining_steps=[int(step) for step in remaining],
        progress_percentage=int(len(completed) * 100 / total + 0.5),
        is_complete=not remaining,
    )
