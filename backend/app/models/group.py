"""Group ORM — container for threads and subscriptions.

Invariants:
    - name is non-nullable
    - Groups are never deleted
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Group(Base):
    """Discussion group."""
    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    threads: Mapped[list["Thread"]] = relationship(
        "Thread", back_populates="group",
    )
    subscriptions: Mapped[list["Subscription"]] = relationship(
        "Subscription", back_populates="group",
    )
