"""Boundary Protocols — contracts between the notifier and outbound transports.

Invariants:
    - The notifier depends on these Protocols, never on aiosmtplib or httpx
    - Implementations raise NotificationDeliveryError on transport failure

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol


class MailSender(Protocol):
    """One HTML message to many blind-copied recipients."""
    async def send(self, recipients: list[str], subject: str, html: str) -> None: ...


class WhatsAppSender(Protocol):
    """One plain-text message to many phones through the automation bridge."""
    @property
    def configured(self) -> bool: ...

    async def send(self, phones: list[str], text: str) -> None: ...
