"""Outgoing email delivery."""

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol

from app.config import get_settings
from app.exceptions import EmailDeliveryError

logger = logging.getLogger("prof_smart")


@dataclass(frozen=True)
class MailMessage:
    to: str
    subject: str
    text: str


class MailSender(Protocol):
    def send(self, message: MailMessage) -> None: ...


class SMTPMailSender:
    """Sends mail through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        sender: str = "",
        use_tls: bool = False,
        timeout: float = 10,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, message: MailMessage) -> None:
        """Deliver a message. Raises EmailDeliveryError on a bad header, SMTP or network failure."""
        try:
            # Header assignment rejects CR/LF with ValueError
            msg = EmailMessage()
            msg["Subject"] = message.subject
            msg["From"] = self.sender or self.username
            msg["To"] = message.to
            msg.set_content(message.text)

            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                if self.use_tls:
                    client.starttls(context=ssl.create_default_context())
                if self.username:
                    client.login(self.username, self.password)
                client.send_message(msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.exception("Failed to send email to %r", message.to)
            raise EmailDeliveryError() from e


class ConsoleMailSender:
    """Writes messages to the log instead of sending them. Used when no SMTP host is configured."""

    def send(self, message: MailMessage) -> None:
        logger.info("PASSWORD RESET email to %s (%s):\n%s", message.to, message.subject, message.text)


_mail_sender: MailSender | None = None


def get_mail_sender() -> MailSender:
    """Get singleton mail sender instance."""
    global _mail_sender
    if _mail_sender is None:
        settings = get_settings()
        if settings.MAIL_HOST:
            _mail_sender = SMTPMailSender(
                host=settings.MAIL_HOST,
                port=settings.MAIL_PORT,
                username=settings.MAIL_USER,
                password=settings.MAIL_PASS,
                sender=settings.MAIL_FROM,
                use_tls=settings.MAIL_USE_TLS,
                timeout=settings.MAIL_TIMEOUT,
            )
        else:
            _mail_sender = ConsoleMailSender()
    return _mail_sender
