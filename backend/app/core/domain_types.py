"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, GroupId, ThreadId, PostId wrap UUIDs
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
GroupId = NewType("GroupId", UUID)
ThreadId = NewType("ThreadId", UUID)
PostId = NewType("PostId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class PostVia(str, Enum):
    """Channel a post originated from — maps to DB `via` column."""
    WEB = "web"
    WHATSAPP = "whatsapp"


class NotificationChannel(str, Enum):
    """Outbound fan-out channels."""
    EMAIL = "email"
    WHATSAPP = "whatsapp"


class DeliveryOutcome(str, Enum):
    """Result of one channel attempt inside announce()."""
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"
