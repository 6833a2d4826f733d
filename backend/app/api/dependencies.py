"""Request Dependencies — wires the per-request notifier from shared resources.

Invariants:
    - Notifier gets the request's DB session plus the process-wide channels
    - Nothing here is cached per process except what channels.py already holds
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.channels import get_mailer, get_whatsapp_client
from app.infrastructure.database import get_db
from app.infrastructure.mailer import SmtpMailer
from app.infrastructure.whatsapp_client import WhatsAppWebhookClient
from app.services.notifier import GroupNotifier


def get_notifier(
    db: AsyncSession = Depends(get_db),
    mailer: SmtpMailer = Depends(get_mailer),
    whatsapp: WhatsAppWebhookClient = Depends(get_whatsapp_client),
) -> GroupNotifier:
    return GroupNotifier(db, mailer, whatsapp)
