"""Group Notifier — fans forum activity out to opted-in subscribers per channel.

Invariants:
    - One generic routine for every channel: select opted-in subscribers →
      project contact field → drop missing → dispatch once or skip
    - Empty contact set → no transport call at all
    - WhatsApp without a configured webhook → skipped before any DB lookup
    - notify_by_* propagate NotificationDeliveryError; announce() catches every
      error per channel (delivery, recipient lookup, message building), so a
      failed channel never fails the write that triggered it

Design Decisions:
    - Channels described as data (ChannelRoute) rather than two copies of the
      same query/filter/dispatch block
    - Sequential, awaited inline: the caller's response waits for both attempts
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.core.channel_protocols import MailSender, WhatsAppSender
from app.core.domain_types import DeliveryOutcome, NotificationChannel
from app.core.errors import NotificationDeliveryError
from app.core.fan_out import collect_contacts
from app.core.format_notifications import Announcement
from app.models.subscription import Subscription
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelRoute:
    """How one channel picks its subscribers and their contact."""
    channel: NotificationChannel
    opted_in: InstrumentedAttribute[bool]
    contact_of: Callable[[User], str | None]


EMAIL_ROUTE = ChannelRoute(
    NotificationChannel.EMAIL, Subscription.email_on, lambda u: u.email,
)
WHATSAPP_ROUTE = ChannelRoute(
    NotificationChannel.WHATSAPP, Subscription.wa_on, lambda u: u.phone,
)


class GroupNotifier:
    """Delivers group announcements by e-mail and WhatsApp."""

    def __init__(
        self, db: AsyncSession, mailer: MailSender, whatsapp: WhatsAppSender,
    ):
        self.db = db
        self.mailer = mailer
        self.whatsapp = whatsapp

    async def _opted_in_users(self, group_id: UUID, route: ChannelRoute) -> list[User]:
        result = await self.db.execute(
            select(User)
            .join(Subscription, Subscription.user_id == User.id)
            .where(Subscription.group_id == group_id, route.opted_in.is_(True))
            .order_by(Subscription.created_at),
        )
        return list(result.scalars().all())

    async def fan_out(
        self,
        group_id: UUID,
        route: ChannelRoute,
        dispatch: Callable[[list[str]], Awaitable[None]],
    ) -> DeliveryOutcome:
        """Select → project → filter → batch-dispatch-or-skip for one channel."""
        users = await self._opted_in_users(group_id, route)
        contacts = collect_contacts(users, route.contact_of)
        if not contacts:
            logger.debug(
                f"No {route.channel.value} recipients for group {group_id}",
                extra={"group_id": str(group_id), "channel": route.channel.value},
            )
            return DeliveryOutcome.SKIPPED
        await dispatch(contacts)
        return DeliveryOutcome.SENT

    async def notify_by_email(
        self, group_id: UUID, subject: str, html: str,
    ) -> DeliveryOutcome:
        async def dispatch(recipients: list[str]) -> None:
            await self.mailer.send(recipients, subject, html)

        return await self.fan_out(group_id, EMAIL_ROUTE, dispatch)

    async def notify_by_whatsapp(self, group_id: UUID, text: str) -> DeliveryOutcome:
        if not self.whatsapp.configured:
            logger.debug(
                "WhatsApp webhook not configured, skipping",
                extra={"group_id": str(group_id), "channel": "whatsapp"},
            )
            return DeliveryOutcome.SKIPPED

        async def dispatch(phones: list[str]) -> None:
            await self.whatsapp.send(phones, text)

        return await self.fan_out(group_id, WHATSAPP_ROUTE, dispatch)

    async def announce(
        self, group_id: UUID, announcement: Announcement,
    ) -> dict[str, DeliveryOutcome]:
        """Run every channel in turn; a failing channel is logged, not raised."""
        attempts = (
            (NotificationChannel.EMAIL, lambda: self.notify_by_email(
                group_id, announcement.subject, announcement.html,
            )),
            (NotificationChannel.WHATSAPP, lambda: self.notify_by_whatsapp(
                group_id, announcement.text,
            )),
        )
        outcomes: dict[str, DeliveryOutcome] = {}
        for channel, attempt in attempts:
            try:
                outcomes[channel.value] = await attempt()
            except NotificationDeliveryError as e:
                logger.error(
                    f"Notification failed: {e.message}",
                    extra={
                        "group_id": str(group_id),
                        "channel": channel.value,
                        "error_code": e.code,
                    },
                    exc_info=True,
                )
                outcomes[channel.value] = DeliveryOutcome.FAILED
            except Exception:
                logger.error(
                    f"Notification crashed on {channel.value}",
                    extra={"group_id": str(group_id), "channel": channel.value},
                    exc_info=True,
                )
                outcomes[channel.value] = DeliveryOutcome.FAILED
        return outcomes
