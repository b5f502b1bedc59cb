"""Custom application exceptions."""

from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """Validation error exception."""

    def __init__(self, detail: str = "Validation failed", errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class NotFoundError(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource", identifier: str | None = None) -> None:
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} with ID '{identifier}' not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidStateError(ValidationError):
    """Unknown entity kind, status or workflow step.

    Raised for values outside the closed sets the registry knows about. This
    is a caller bug and is never retried.
    """

    def __init__(self, field: str, value: Any, context: str | None = None) -> None:
        self.field = field
        self.value = value
        detail = f"Unknown {field}: {value!r}"
        if context:
            detail = f"{detail} ({context})"
        super().__init__(detail)


class TransitionDeniedError(AppException):
    """Both statuses are valid but the edge between them is not."""

    def __init__(self, kind: str, current: str, target: str) -> None:
        self.kind = kind
        self.current = current
        self.target = target
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Action not allowed in current status: "
                f"{kind} cannot move from {current} to {target}"
            ),
        )


class AddOnLimitExceededError(ValidationError):
    """Too many add-ons selected for one booking."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"A booking may hold at most {limit} add-ons, got {count}")


class ConcurrentModificationError(AppException):
    """Stored version differs from the version the caller read."""

    def __init__(self, kind: str, entity_id: str, expected_version: int, actual_version: int | None = None) -> None:
        self.kind = kind
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        detail = f"{kind} '{entity_id}' was modified concurrently (expected version {expected_version}"
        if actual_version is not None:
            detail = f"{detail}, found {actual_version}"
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=f"{detail})")
