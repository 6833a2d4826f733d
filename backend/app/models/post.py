"""Post ORM — a message inside a thread.

Invariants:
    - Always belongs to exactly one Thread (thread_id FK)
    - via records the origin channel: "web" | "whatsapp" (PostVia)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.domain_types import PostVia
from app.db.base import Base


class Post(Base):
    """Thread message (question body or reply)."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    thread_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("threads.id"), nullable=False, index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    via: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PostVia.WEB.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    thread: Mapped["Thread"] = relationship("Thread", back_populates="posts")
