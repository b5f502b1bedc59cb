"""Core utilities: exceptions and logging."""

from medivoy.core.exceptions import (
    AddOnLimitExceededError,
    AppException,
    ConcurrentModificationError,
    InvalidStateError,
    NotFoundError,
    TransitionDeniedError,
    ValidationError,
)
from medivoy.core.logging import configure_logging

__all__ = [
    "AddOnLimitExceededError",
    "AppException",
    "ConcurrentModificationError",
    "InvalidStateError",
    "NotFoundError",
    "TransitionDeniedError",
    "ValidationError",
    "configure_logging",
]
