"""Tests for SMTP delivery and mailer selection."""

from __future__ import annotations

import smtplib

from app.infra.mail import smtp_mailer
from app.infra.mail.smtp_mailer import SMTPMailer, build_mailer
from app.services._shared.ports.mailer import InMemoryMailer, OutgoingEmail


class _RecordingSMTP:
    """Stand-in for :class:`smtplib.SMTP` that records the conversation."""

    instances: list["_RecordingSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls: list[str] = []
        self.sent = []
        _RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(f"login:{username}")

    def send_message(self, msg):
        self.sent.append(msg)


class _RefusingSMTP(_RecordingSMTP):
    def send_message(self, msg):
        raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"no such user")})


def _message() -> OutgoingEmail:
    return OutgoingEmail(to="reader@example.com", subject="Reset code", html="<b>123456</b>")


def test_build_mailer_without_server_keeps_mail_in_memory() -> None:
    assert isinstance(build_mailer({"MAIL_SERVER": ""}), InMemoryMailer)


def test_build_mailer_reads_smtp_settings() -> None:
    mailer = build_mailer(
        {
            "MAIL_SERVER": "smtp.example.com",
            "MAIL_PORT": "2525",
            "MAIL_USERNAME": "bot@example.com",
            "MAIL_PASSWORD": "pw",
            "MAIL_USE_TLS": False,
        }
    )

    assert isinstance(mailer, SMTPMailer)
    assert mailer.port == 2525
    assert mailer.use_tls is False
    assert mailer.from_header == "BookWorm_App <bot@example.com>"


def test_send_delivers_html_alternative(monkeypatch) -> None:
    _RecordingSMTP.instances.clear()
    monkeypatch.setattr(smtp_mailer.smtplib, "SMTP", _RecordingSMTP)
    mailer = SMTPMailer(
        host="smtp.example.com", username="bot@example.com", password="pw", background=False
    )

    mailer.send(_message())

    (smtp,) = _RecordingSMTP.instances
    assert smtp.calls == ["starttls", "login:bot@example.com"]
    (msg,) = smtp.sent
    assert msg["To"] == "reader@example.com"
    assert msg["Subject"] == "Reset code"
    html = msg.get_body(preferencelist=("html",))
    assert "123456" in html.get_content()


def test_delivery_failure_is_logged_not_raised(monkeypatch, caplog) -> None:
    monkeypatch.setattr(smtp_mailer.smtplib, "SMTP", _RefusingSMTP)
    mailer = SMTPMailer(host="smtp.example.com", background=False)

    mailer.send(_message())

    assert any(r.getMessage() == "mail.delivery_failed" for r in caplog.records)
