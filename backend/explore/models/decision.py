"""Decision ORM: persists one like/pass judgment per ordered (actor, recipient) pair.

Invariants:
    - (actor_id, recipient_id) is the primary key; a later write replaces the row
    - created_at is written once on first insert, never updated
    - updated_at is refreshed on every write to the pair
    - actor_id == recipient_id is not rejected here (API boundary owns that rule)

Design Decisions:
    - Text identifiers: numeric format is a transport concern
    - Indexes on recipient_id, actor_id, created_at DESC and updated_at DESC
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from explore.db.base import Base


class Decision(Base):
    """Directional like/pass decision from actor toward recipient."""
    __tablename__ = "decisions"
    __table_args__ = (
        Index("idx_decisions_recipient_id", "recipient_id"),
        Index("idx_decisions_actor_id", "actor_id"),
    )

    actor_id: Mapped[str] = mapped_column(Text, primary_key=True)
    recipient_id: Mapped[str] = mapped_column(Text, primary_key=True)
    liked: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


Index("idx_decisions_created_at", Decision.created_at.desc())
Index("idx_decisions_updated_at", Decision.updated_at.desc())
