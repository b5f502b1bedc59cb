"""Entity status table.

Revision ID: 001_entity_statuses
Revises: None
Create Date: 2026-10-19

Creates the lifecycle status table shared by all entity kinds
(booking, appointment, expert_call, payment, prescription). ``version`` is
the optimistic concurrency token incremented on every accepted transition.
"""

from typing import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers
revision: str = "001_entity_statuses"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create entity status table."""

    # ==================== ENTITY STATUSES ====================
    op.create_table(
        "entity_statuses",
        sa.Column("entity_kind", sa.String(30), primary_key=True),
        sa.Column("entity_id", sa.String(64), primary_key=True),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("version >= 1", name="ck_entity_statuses_version_positive"),
    )
    op.create_index("ix_entity_statuses_status", "entity_statuses", ["status"])


def downgrade() -> None:
    """Drop entity status table."""
    op.drop_index("ix_entity_statuses_status", table_name="entity_statuses")
    op.drop_table("entity_statuses")
