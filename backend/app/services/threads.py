"""Thread Workflows — open threads, post replies, announce both to the group.

Invariants:
    - A thread and its first post are written in one commit (via="web")
    - Replies default to via="web"; the inbound webhook writes via="whatsapp"
    - announce_* runs after commit; its outcome never changes the HTTP result

Design Decisions:
    - Writes and announcements are separate calls so the inbound WhatsApp path
      can reuse create_post without re-broadcasting the message
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import DeliveryOutcome, PostVia
from app.core.format_notifications import format_new_thread, format_reply
from app.models.post import Post
from app.models.thread import Thread
from app.services.lookups import (
    get_group_or_404, get_thread_or_404, get_user_or_404,
)
from app.services.notifier import GroupNotifier

logger = logging.getLogger(__name__)


async def create_thread(
    db: AsyncSession, group_id: UUID, author_id: UUID, title: str, content: str,
) -> Thread:
    """Persist a thread with its opening post."""
    await get_group_or_404(db, group_id)
    await get_user_or_404(db, author_id)

    thread = Thread(group_id=group_id, author_id=author_id, title=title)
    thread.posts = [
        Post(author_id=author_id, content=content, via=PostVia.WEB.value),
    ]
    db.add(thread)
    await db.commit()
    logger.info(
        f"Thread created: {thread.title}",
        extra={"group_id": str(group_id), "thread_id": str(thread.id)},
    )
    return thread


async def create_post(
    db: AsyncSession,
    thread: Thread,
    author_id: UUID,
    content: str,
    via: PostVia = PostVia.WEB,
) -> Post:
    """Persist a reply on an existing thread."""
    post = Post(
        thread_id=thread.id, author_id=author_id,
        content=content, via=via.value,
    )
    db.add(post)
    await db.commit()
    logger.info(
        f"Post created via {via.value}",
        extra={"group_id": str(thread.group_id), "thread_id": str(thread.id)},
    )
    return post


async def reply_to_thread(
    db: AsyncSession,
    thread_id: UUID,
    author_id: UUID,
    content: str,
    via: PostVia = PostVia.WEB,
) -> tuple[Thread, Post]:
    thread = await get_thread_or_404(db, thread_id)
    await get_user_or_404(db, author_id)
    post = await create_post(db, thread, author_id, content, via)
    return thread, post


async def list_group_threads(db: AsyncSession, group_id: UUID) -> list[Thread]:
    """Threads of a group, newest first."""
    await get_group_or_404(db, group_id)
    result = await db.execute(
        select(Thread)
        .where(Thread.group_id == group_id)
        .order_by(Thread.created_at.desc()),
    )
    return list(result.scalars().all())


async def announce_new_thread(
    notifier: GroupNotifier, thread: Thread, content: str, base_url: str,
) -> dict[str, DeliveryOutcome]:
    announcement = format_new_thread(thread.title, content, thread.id, base_url)
    return await notifier.announce(thread.group_id, announcement)


async def announce_reply(
    notifier: GroupNotifier, thread: Thread, content: str, base_url: str,
) -> dict[str, DeliveryOutcome]:
    announcement = format_reply(thread.title, content, thread.id, base_url)
    return await notifier.announce(thread.group_id, announcement)
