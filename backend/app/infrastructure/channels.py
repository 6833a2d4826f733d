"""Outbound Channel Registry — process-wide mailer and webhook client.

Invariants:
    - Exactly one SmtpMailer and one WhatsAppWebhookClient per process
    - Built once from Settings on startup; never reconfigured per request
    - Dependencies raise if used before init_channels() (same contract as get_db)

Design Decisions:
    - Handed to the notifier through FastAPI dependencies instead of imported
      globals, so tests swap them with dependency_overrides
"""

from app.config import Settings
from app.infrastructure.mailer import SmtpMailer
from app.infrastructure.whatsapp_client import WhatsAppWebhookClient

# Singletons (initialized on startup)
mailer: SmtpMailer | None = None
whatsapp_client: WhatsAppWebhookClient | None = None


def init_channels(settings: Settings) -> None:
    global mailer, whatsapp_client
    mailer = SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.from_email,
        secure=settings.smtp_secure,
        username=settings.smtp_user,
        password=settings.smtp_pass,
        timeout_seconds=settings.smtp_timeout_seconds,
    )
    whatsapp_client = WhatsAppWebhookClient(
        settings.whatsapp_webhook_url,
        timeout_seconds=settings.webhook_timeout_seconds,
    )


async def close_channels() -> None:
    global mailer, whatsapp_client
    if whatsapp_client:
        await whatsapp_client.aclose()
    mailer = None
    whatsapp_client = None


def get_mailer() -> SmtpMailer:
    """FastAPI dependency for the shared SMTP mailer."""
    if not mailer:
        raise RuntimeError("Outbound channels not initialized")
    return mailer


def get_whatsapp_client() -> WhatsAppWebhookClient:
    """FastAPI dependency for the shared WhatsApp webhook client."""
    if not whatsapp_client:
        raise RuntimeError("Outbound channels not initialized")
    return whatsapp_client
