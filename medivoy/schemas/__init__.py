"""Pydantic schemas for core inputs and outputs."""

from medivoy.schemas.cost import (
    AddOn,
    AddOnCategory,
    CategoryTotal,
    CostEstimate,
    CostEstimateRequest,
)
from medivoy.schemas.lifecycle import EntityState, TransitionRequest, TransitionResult
from medivoy.schemas.notification import (
    NotificationChannel,
    NotificationPreference,
    NotificationType,
    Weekday,
)
from medivoy.schemas.workflow import StepMetadata, WorkflowProgress

__all__ = [
    "AddOn",
    "AddOnCategory",
    "CategoryTotal",
    "CostEstimate",
    "CostEstimateRequest",
    "EntityState",
    "TransitionRequest",
    "TransitionResult",
    "NotificationChannel",
    "NotificationPreference",
    "NotificationType",
    "Weekday",
    "StepMetadata",
    "WorkflowProgress",
]
