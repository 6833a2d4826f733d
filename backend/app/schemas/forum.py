"""Forum Schemas — users, groups, subscriptions, threads and posts.

Invariants:
    - name/title/content: non-empty after stripping
    - email validated by email-validator (EmailStr)
    - Subscription flags are optional on input; the route defaults them to True
    - via limited to PostVia values, defaults to "web"
"""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.core.domain_types import PostVia
from app.schemas.base import CamelModel


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty or whitespace")
    return v


# --- Users --------------------------------------------------------------------

class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(None, max_length=40)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class UserResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    created_at: datetime


# --- Groups -------------------------------------------------------------------

class GroupCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class GroupResponse(CamelModel):
    id: UUID
    name: str
    created_at: datetime


class SubscriptionCreate(CamelModel):
    user_id: UUID
    email_on: bool | None = None
    wa_on: bool | None = None


class SubscriptionResponse(CamelModel):
    user_id: UUID
    group_id: UUID
    email_on: bool
    wa_on: bool


# --- Threads & posts ----------------------------------------------------------

class ThreadCreate(CamelModel):
    author_id: UUID
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=20_000)

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class ReplyCreate(CamelModel):
    author_id: UUID
    content: str = Field(min_length=1, max_length=20_000)
    via: PostVia = PostVia.WEB

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        return _strip_required(v)


class PostResponse(CamelModel):
    id: UUID
    thread_id: UUID
    author_id: UUID
    content: str
    via: PostVia
    created_at: datetime


class ThreadSummary(CamelModel):
    id: UUID
    group_id: UUID
    author_id: UUID
    title: str
    created_at: datetime


class ThreadResponse(ThreadSummary):
    """Thread with its posts, oldest first."""
    posts: list[PostResponse] = []
