"""Subscription ORM — per-channel opt-in of a user to a group.

Invariants:
    - (user_id, group_id) is the composite primary key: one row per pair
    - email_on / wa_on are independent; both default to True
    - Re-subscribing overwrites the flags in place (upsert, see routes/groups.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Subscription(Base):
    """User ↔ Group opt-in with channel flags."""
    __tablename__ = "subscriptions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), primary_key=True,
    )
    group_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("groups.id"), primary_key=True, index=True,
    )
    email_on: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    wa_on: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="subscriptions")
    group: Mapped["Group"] = relationship("Group", back_populates="subscriptions")
