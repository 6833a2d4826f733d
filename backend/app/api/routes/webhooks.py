"""Webhooks — inbound events pushed by the workflow-automation bridge.

Invariants:
    - Unknown authorPhone → 400 UNKNOWN_PHONE, nothing written
    - Success answers {"ok": true, "post": {...}}
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.schemas.forum import PostResponse
from app.schemas.webhooks import WhatsAppInbound, WhatsAppInboundResponse
from app.services.inbound_whatsapp import handle_inbound_message

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.post("/whatsapp", response_model=WhatsAppInboundResponse)
async def whatsapp_inbound(
    body: WhatsAppInbound, db: AsyncSession = Depends(get_db),
):
    post = await handle_inbound_message(db, body)
    return WhatsAppInboundResponse(ok=True, post=PostResponse.model_validate(post))
