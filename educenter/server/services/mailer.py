"""
Outgoing e-mail.

Delivery failures are logged and swallowed so that registration and OTP
requests still succeed when the mail server is unavailable.
"""

from __future__ import annotations

from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from educenter.core.logging_config import get_logger
from educenter.server.core.config import SMTPConfig, settings

logger = get_logger(__name__)

OTP_SUBJECT = "Your one-time password"


class Mailer:
    """Sends transactional e-mails through the configured SMTP server."""

    def __init__(self, config: SMTPConfig) -> None:
        self.config = config

    def _build_message(self, recipient: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        """Send one plain-text e-mail.

        Returns:
            True when the server accepted the message, False otherwise
        """
        if not self.config.enabled:
            logger.info(f"SMTP disabled, not sending '{subject}' to {recipient}")
            return False

        message = self._build_message(recipient, subject, body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.config.host,
                port=self.config.port,
                username=self.config.username,
                password=self.config.password,
                start_tls=self.config.use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{subject}' to {recipient}: {e}", exc_info=True)
            return False

        logger.info(f"Sent '{subject}' to {recipient}")
        return True

    async def send_otp(self, recipient: str, code: str) -> bool:
        body = f"Your one-time password is {code}. It expires in {settings.otp_interval_seconds // 60} minutes."
        return await self.send(recipient, OTP_SUBJECT, body)


_mailer: Optional[Mailer] = None


def get_mailer() -> Mailer:
    """FastAPI dependency returning the process-wide mailer."""
    global _mailer
    if _mailer is None:
        _mailer = Mailer(settings.smtp)
    return _mailer
