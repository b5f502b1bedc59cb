"""Booking workflow Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class StepMetadata(BaseModel):
    """Display metadata for one workflow step."""

    model_config = ConfigDict(frozen=True)

    step: int = Field(..., ge=1)
    key: str
    label: str
    description: str


class WorkflowProgress(BaseModel):
    """Progress through the booking-creation workflow."""

    model_config = ConfigDict(frozen=True)

    total_steps: int
    current_step: int
    completed_steps: list[int]
    completed_steps_count: int
    remaining_steps: list[int]
    progress_percentage: int = Field(..., ge=0, le=100)
    is_complete: bool
