"""Decisions table: one like/pass per ordered (actor, recipient) pair.

Revision ID: 001_decisions
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_decisions"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "decisions",
        sa.Column("actor_id", sa.Text, nullable=False),
        sa.Column("recipient_id", sa.Text, nullable=False),
        sa.Column("liked", sa.Boolean, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("actor_id", "recipient_id"),
    )
    op.create_index("idx_decisions_recipient_id", "decisions", ["recipient_id"])
    op.create_index("idx_decisions_actor_id", "decisions", ["actor_id"])
    op.create_index("idx_decisions_created_at", "decisions", [sa.text("created_at DESC")])
    op.create_index("idx_decisions_updated_at", "decisions", [sa.text("updated_at DESC")])


def downgrade() -> None:
    op.drop_index("idx_decisions_updated_at", table_name="decisions")
    op.drop_index("idx_decisions_created_at", table_name="decisions")
    op.drop_index("idx_decisions_actor_id", table_name="decisions")
    op.drop_index("idx_decisions_recipient_id", table_name="decisions")
    op.drop_table("decisions")
