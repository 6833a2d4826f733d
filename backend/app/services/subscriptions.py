"""Subscriptions — upsert of a user's per-channel opt-in to a group.

Invariants:
    - One row per (user_id, group_id); a second subscribe overwrites the flags
    - Omitted flags become True, they do NOT keep the previously stored value
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.subscription import Subscription
from app.services.lookups import get_group_or_404, get_user_or_404

logger = logging.getLogger(__name__)


async def upsert_subscription(
    db: AsyncSession,
    group_id: UUID,
    user_id: UUID,
    email_on: bool | None = None,
    wa_on: bool | None = None,
) -> Subscription:
    """Create or overwrite the subscription for (user_id, group_id)."""
    await get_group_or_404(db, group_id)
    await get_user_or_404(db, user_id)

    email_on = True if email_on is None else email_on
    wa_on = True if wa_on is None else wa_on

    subscription = await db.get(Subscription, (user_id, group_id))
    if subscription:
        subscription.email_on = email_on
        subscription.wa_on = wa_on
    else:
        subscription = Subscription(
            user_id=user_id, group_id=group_id,
            email_on=email_on, wa_on=wa_on,
        )
        db.add(subscription)
    await db.commit()
    logger.info(
        f"User {user_id} subscribed (email={email_on}, whatsapp={wa_on})",
        extra={"group_id": str(group_id)},
    )
    return subscription
