"""Thread ORM — a question opened in a group, owning its posts.

Invariants:
    - Always belongs to exactly one Group (group_id FK)
    - The first Post is created in the same commit as the Thread
    - posts ordered by created_at (oldest first)

Design Decisions:
    - posts loaded with selectin: every read of a thread renders its posts,
      and async sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Thread(Base):
    """Discussion thread."""
    __tablename__ = "threads"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    group_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("groups.id"), nullable=False, index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    group: Mapped["Group"] = relationship("Group", back_populates="threads")
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="thread", order_by="Post.created_at",
        lazy="selectin",
    )
