"""User ORM — caller-asserted forum identity.

Invariants:
    - id is UUID primary key (client-side default)
    - email is required, phone optional (WhatsApp fan-out skips users without one)
    - No uniqueness beyond the primary key: identity is not verified

Design Decisions:
    - phone indexed: inbound WhatsApp webhook resolves authors by exact phone match
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class User(Base):
    """Forum member."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(
        String(40), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    subscriptions: Mapped[list["Subscription"]] = relationship(
        "Subscription", back_populates="user",
    )
