"""SMTP delivery for transactional email."""

from __future__ import annotations

import logging
import smtplib
import threading
from dataclasses import dataclass
from email.message import EmailMessage

from app.services._shared.ports.mailer import InMemoryMailer, Mailer, OutgoingEmail

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SMTPMailer(Mailer):
    """
    Send mail through an SMTP relay on a daemon thread.

    ``send`` returns immediately; delivery errors are logged with their
    traceback and never reach the caller.
    """

    host: str
    port: int = 587
    username: str | None = None
    password: str | None = None
    use_tls: bool = True
    sender_name: str = "BookWorm_App"
    timeout: float = 10.0
    background: bool = True

    @property
    def from_header(self) -> str:
        return f"{self.sender_name} <{self.username or 'no-reply@localhost'}>"

    def send(self, message: OutgoingEmail) -> None:
        if not self.background:
            self._deliver(message)
            return
        worker = threading.Thread(
            target=self._deliver, args=(message,), name="smtp-mailer", daemon=True
        )
        worker.start()

    def _deliver(self, message: OutgoingEmail) -> None:
        msg = EmailMessage()
        msg["From"] = self.from_header
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(message.html, subtype="html")
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError):
            logger.exception("mail.delivery_failed", extra={"subject": message.subject})
            return
        logger.info("mail.sent", extra={"subject": message.subject})


def build_mailer(cfg) -> Mailer:
    """
    Pick the mail adapter for ``cfg``.

    Without ``MAIL_SERVER`` messages are kept in memory, which is what the
    test and local setups want.
    """
    host = cfg.get("MAIL_SERVER") or ""
    if not host:
        return InMemoryMailer()
    return SMTPMailer(
        host=host,
        port=int(cfg.get("MAIL_PORT", 587)),
        username=cfg.get("MAIL_USERNAME"),
        password=cfg.get("MAIL_PASSWORD"),
        use_tls=bool(cfg.get("MAIL_USE_TLS", True)),
        sender_name=cfg.get("MAIL_SENDER", "BookWorm_App"),
    )
