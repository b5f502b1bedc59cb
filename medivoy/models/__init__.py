"""SQLAlchemy models."""

from medivoy.models.entity_status import EntityStatusRecord

__all__ = ["EntityStatusRecord"]
