"""Entity status database model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from medivoy.database import Base


class EntityStatusRecord(Base):
    """Current lifecycle status of one entity.

    ``version`` is the optimistic concurrency token: it starts at 1 and is
    incremented on every accepted transition.
    """

    __tablename__ = "entity_statuses"

    entity_kind: Mapped[str] = mapped_column(String(30), primary_key=True)  # booking, appointment, ...
    entity_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
