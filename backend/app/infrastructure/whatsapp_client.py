"""WhatsApp Webhook Client — hands outbound messages to the workflow-automation bridge.

Invariants:
    - Payload shape is fixed: {"phones": [...], "text": "..."}
    - One POST per send() call, all phones batched
    - Not configured (no URL) → configured is False and send() is a no-op
    - Connection errors, timeouts and non-2xx answers → NotificationDeliveryError

Design Decisions:
    - Shared httpx.AsyncClient: opened on startup, closed on shutdown
    - No retry: the bridge owns delivery; a failed POST is logged by the notifier
"""

import logging

import httpx

from app.core.domain_types import NotificationChannel
from app.core.errors import NotificationDeliveryError

logger = logging.getLogger(__name__)


class WhatsAppWebhookClient:
    """POSTs batched WhatsApp messages to the automation webhook."""

    def __init__(
        self,
        webhook_url: str | None,
        timeout_seconds: float = 10,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.webhook_url = webhook_url or None
        self._client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    @property
    def configured(self) -> bool:
        return self.webhook_url is not None

    async def send(self, phones: list[str], text: str) -> None:
        """POST one batched message for all phones."""
        if not self.configured or not phones:
            return
        try:
            response = await self._client.post(
                self.webhook_url, json={"phones": phones, "text": text},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationDeliveryError(
                NotificationChannel.WHATSAPP.value,
                f"webhook answered {e.response.status_code}",
            ) from e
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(
                NotificationChannel.WHATSAPP.value, str(e) or type(e).__name__,
            ) from e
        logger.info(
            f"WhatsApp webhook accepted {len(phones)} phone(s)",
            extra={
                "channel": NotificationChannel.WHATSAPP.value,
                "recipients": len(phones),
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()
