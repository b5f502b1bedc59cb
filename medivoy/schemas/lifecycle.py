"""Entity lifecycle Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from medivoy.domain.statuses import EntityKind


class EntityState(BaseModel):
    """Stored status of an entity and its optimistic concurrency token."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    status: str
    version: int = Field(..., ge=1)


class TransitionRequest(BaseModel):
    """Schema for requesting a status change."""

    kind: EntityKind
    entity_id: str = Field(..., min_length=1, max_length=64)
    target_status: str = Field(..., min_length=1, max_length=30)


class TransitionResult(BaseModel):
    """Outcome of an accepted status change."""

    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    entity_id: str
    previous_status: str
    status: str
    version: int
    attempts: int = 1
    notified_channels: list[str] = Field(default_factory=list)
    transitioned_at: datetime
