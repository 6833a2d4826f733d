"""Threads — thread detail and replies.

Invariants:
    - GET /api/threads/{id} returns the thread with posts oldest first
    - POST .../replies commits, then announces to the thread's group
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_notifier
from app.config import Settings, get_settings
from app.infrastructure.database import get_db
from app.schemas.forum import PostResponse, ReplyCreate, ThreadResponse
from app.services.lookups import get_thread_or_404
from app.services.notifier import GroupNotifier
from app.services.threads import announce_reply, reply_to_thread

router = APIRouter(prefix="/api/threads", tags=["threads"])


@router.get("/{thread_id}", response_model=ThreadResponse)
async def get_thread(thread_id: UUID, db: AsyncSession = Depends(get_db)):
    return await get_thread_or_404(db, thread_id)


@router.post("/{thread_id}/replies", response_model=PostResponse)
async def reply(
    thread_id: UUID,
    body: ReplyCreate,
    db: AsyncSession = Depends(get_db),
    notifier: GroupNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    """Post a reply and announce it to the thread's group."""
    thread, post = await reply_to_thread(
        db, thread_id, body.author_id, body.content, body.via,
    )
    await announce_reply(notifier, thread, body.content, settings.thread_link_base)
    return post
