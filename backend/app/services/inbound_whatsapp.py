"""Inbound WhatsApp — turns a message relayed by the automation bridge into a post.

Invariants:
    - Author resolved by exact phone match; oldest matching user wins
    - Unknown phone → UnknownPhoneError (400) and nothing is written
    - At-most-once: no dedup, a replayed delivery creates a second post
    - Inbound posts are not re-announced (the sender already is in the chat)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import PostVia
from app.core.errors import UnknownPhoneError
from app.models.post import Post
from app.models.user import User
from app.schemas.webhooks import WhatsAppInbound
from app.services.lookups import get_thread_or_404
from app.services.threads import create_post

logger = logging.getLogger(__name__)


async def find_user_by_phone(db: AsyncSession, phone: str) -> User | None:
    result = await db.execute(
        select(User).where(User.phone == phone).order_by(User.created_at).limit(1),
    )
    return result.scalar_one_or_none()


async def handle_inbound_message(db: AsyncSession, payload: WhatsAppInbound) -> Post:
    """Resolve the author and store the message as a whatsapp post."""
    user = await find_user_by_phone(db, payload.author_phone)
    if not user:
        logger.warning(
            "Inbound WhatsApp message from unknown phone",
            extra={"thread_id": str(payload.thread_id)},
        )
        raise UnknownPhoneError(payload.author_phone)
    thread = await get_thread_or_404(db, payload.thread_id)
    return await create_post(db, thread, user.id, payload.text, PostVia.WHATSAPP)
