"""SMTP Mailer — async outbound e-mail over aiosmtplib.

Invariants:
    - One send() call = one SMTP transaction, however many recipients
    - Recipients are envelope-only (blind copy): no To/Cc/Bcc header lists them
    - Credentials used only when both user and password are configured
    - Every transport failure mapped to NotificationDeliveryError, including
      a message the email package refuses to build (e.g. CR/LF in a header)

Design Decisions:
    - Connection per send (aiosmtplib.send): fan-out sends at most two messages per
      request, a pooled SMTP session would sit idle between events
    - secure=True means implicit TLS (port 465); otherwise STARTTLS is negotiated
      when the server offers it
"""

import logging
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

import aiosmtplib

from app.core.domain_types import NotificationChannel
from app.core.errors import NotificationDeliveryError

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Sends HTML e-mail to a batch of blind-copied recipients."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        secure: bool = False,
        username: str | None = None,
        password: str | None = None,
        timeout_seconds: float = 30,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.secure = secure
        self.timeout_seconds = timeout_seconds
        self._credentials = (
            {"username": username, "password": password}
            if username and password else {}
        )

    def build_message(self, subject: str, html: str) -> EmailMessage:
        """Build the MIME message (headers carry no recipient addresses)."""
        message = EmailMessage()
        message["From"] = self.sender
        message["Subject"] = subject
        message["Date"] = formatdate(localtime=False)
        message["Message-ID"] = make_msgid(domain=self.sender.rpartition("@")[2])
        message.set_content(html, subtype="html")
        return message

    async def send(self, recipients: list[str], subject: str, html: str) -> None:
        """Send one message to all recipients as blind copies."""
        if not recipients:
            return
        try:
            message = self.build_message(subject, html)
            await aiosmtplib.send(
                message,
                sender=self.sender,
                recipients=recipients,
                hostname=self.host,
                port=self.port,
                use_tls=self.secure,
                timeout=self.timeout_seconds,
                **self._credentials,
            )
        except (aiosmtplib.SMTPException, OSError, ValueError) as e:
            raise NotificationDeliveryError(
                NotificationChannel.EMAIL.value, str(e),
            ) from e
        logger.info(
            f"E-mail sent to {len(recipients)} recipient(s)",
            extra={
                "channel": NotificationChannel.EMAIL.value,
                "recipients": len(recipients),
            },
        )
