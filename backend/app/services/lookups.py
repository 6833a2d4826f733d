"""Entity Lookups — fetch-or-404 helpers shared by every workflow.

Invariants:
    - Missing entity → ResourceNotFoundError (404), never None
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ResourceNotFoundError
from app.models.group import Group
from app.models.thread import Thread
from app.models.user import User


async def get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise ResourceNotFoundError("User", str(user_id))
    return user


async def get_group_or_404(db: AsyncSession, group_id: UUID) -> Group:
    group = await db.get(Group, group_id)
    if not group:
        raise ResourceNotFoundError("Group", str(group_id))
    return group


async def get_thread_or_404(db: AsyncSession, thread_id: UUID) -> Thread:
    thread = await db.get(Thread, thread_id)
    if not thread:
        raise ResourceNotFoundError("Thread", str(thread_id))
    return thread
