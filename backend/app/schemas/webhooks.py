"""Webhook Schemas — inbound WhatsApp message from the automation bridge."""

from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.forum import PostResponse


class WhatsAppInbound(CamelModel):
    thread_id: UUID
    author_phone: str = Field(min_length=1, max_length=40)
    text: str = Field(min_length=1, max_length=20_000)


class WhatsAppInboundResponse(CamelModel):
    ok: bool = True
    post: PostResponse
