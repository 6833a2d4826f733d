"""Groups — listing, creation, subscriptions and thread creation.

Invariants:
    - GET /api/groups orders newest first
    - POST .../subscribe upserts; omitted flags default to True
    - POST .../threads commits, then announces; notification failures are
      logged by the notifier and never change the response
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_notifier
from app.config import Settings, get_settings
from app.infrastructure.database import get_db
from app.models.group import Group
from app.schemas.forum import (
    GroupCreate, GroupResponse, SubscriptionCreate, SubscriptionResponse,
    ThreadCreate, ThreadResponse, ThreadSummary,
)
from app.services.notifier import GroupNotifier
from app.services.subscriptions import upsert_subscription
from app.services.threads import (
    announce_new_thread, create_thread, list_group_threads,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/groups", tags=["groups"])


@router.get("", response_model=list[GroupResponse])
async def list_groups(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Group).order_by(Group.created_at.desc()))
    return result.scalars().all()


@router.post("", response_model=GroupResponse)
async def create_group(body: GroupCreate, db: AsyncSession = Depends(get_db)):
    group = Group(name=body.name)
    db.add(group)
    await db.commit()
    return group


@router.post("/{group_id}/subscribe", response_model=SubscriptionResponse)
async def subscribe(
    group_id: UUID, body: SubscriptionCreate,
    db: AsyncSession = Depends(get_db),
):
    return await upsert_subscription(
        db, group_id, body.user_id, body.email_on, body.wa_on,
    )


@router.get("/{group_id}/threads", response_model=list[ThreadSummary])
async def list_threads(group_id: UUID, db: AsyncSession = Depends(get_db)):
    return await list_group_threads(db, group_id)


@router.post("/{group_id}/threads", response_model=ThreadResponse)
async def open_thread(
    group_id: UUID,
    body: ThreadCreate,
    db: AsyncSession = Depends(get_db),
    notifier: GroupNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    """Create a thread with its first post and announce it to the group."""
    thread = await create_thread(
        db, group_id, body.author_id, body.title, body.content,
    )
    await announce_new_thread(
        notifier, thread, body.content, settings.thread_link_base,
    )
    return thread
