"""
Unit tests for SmtpMailer adapter.

smtplib is patched so no network connection is made.
"""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from signup.adapters.smtp.mailer import ACTIVATION_SUBJECT, SmtpMailer, build_activation_message
from signup.domain.exceptions import EmailDeliveryFailed


def make_mailer(**overrides) -> SmtpMailer:
    options = {
        "host": "smtp.example.com",
        "port": 587,
        "sender": "My App <info@my-app.com>",
        "username": "user",
        "password": "secret",
        "activation_base_url": "http://localhost:8080/#/login?token=",
    }
    options.update(overrides)
    return SmtpMailer(**options)


def smtp_patch():
    """Patch smtplib.SMTP and return (patcher, server mock)."""
    server = MagicMock()
    factory = MagicMock()
    factory.return_value.__enter__.return_value = server
    return patch("signup.adapters.smtp.mailer.smtplib.SMTP", factory), server


class TestBuildActivationMessage:
    """Tests for activation message composition."""

    def test_headers(self) -> None:
        message = build_activation_message("from@my-app.com", "user1@mail.com", "tok", "http://x/?t=")
        assert message["Subject"] == ACTIVATION_SUBJECT
        assert message["To"] == "user1@mail.com"
        assert message["From"] == "from@my-app.com"

    def test_body_contains_email_and_token(self) -> None:
        message = build_activation_message("from@my-app.com", "user1@mail.com", "tok123", "http://x/?t=")
        for part in message.get_payload():
            body = part.get_payload(decode=True).decode()
            assert "user1@mail.com" in body
            assert "tok123" in body
            assert "http://x/?t=tok123" in body


class TestSmtpMailer:
    """Tests for delivery through the SMTP relay."""

    @pytest.mark.asyncio
    async def test_sends_to_recipient(self) -> None:
        patcher, server = smtp_patch()
        with patcher as factory:
            await make_mailer().send_activation_email("user1@mail.com", "tok123")

        factory.assert_called_once_with("smtp.example.com", 587, timeout=10.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("user", "secret")
        sender, recipients, body = server.sendmail.call_args[0]
        assert sender == "My App <info@my-app.com>"
        assert recipients == ["user1@mail.com"]
        assert "user1@mail.com" in body

    @pytest.mark.asyncio
    async def test_no_login_without_credentials(self) -> None:
        patcher, server = smtp_patch()
        with patcher:
            await make_mailer(username="", use_tls=False).send_activation_email(
                "user1@mail.com", "tok123"
            )

        server.starttls.assert_not_called()
        server.login.assert_not_called()
        server.sendmail.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            smtplib.SMTPRecipientsRefused({"user1@mail.com": (550, b"rejected")}),
            smtplib.SMTPAuthenticationError(535, b"bad credentials"),
            ConnectionRefusedError(),
            UnicodeEncodeError("ascii", "üser@gmail.com", 0, 1, "ordinal not in range(128)"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_transport_failure_raises_delivery_error(self, error: Exception) -> None:
        patcher, server = smtp_patch()
        server.sendmail.side_effect = error
        with patcher, pytest.raises(EmailDeliveryFailed) as exc_info:
            await make_mailer().send_activation_email("user1@mail.com", "tok123")

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_connection_failure_raises_delivery_error(self) -> None:
        with patch(
            "signup.adapters.smtp.mailer.smtplib.SMTP", side_effect=OSError("unreachable")
        ), pytest.raises(EmailDeliveryFailed):
            await make_mailer().send_activation_email("user1@mail.com", "tok123")

    @pytest.mark.asyncio
    async def test_port_465_uses_implicit_tls(self) -> None:
        server = MagicMock()
        factory = MagicMock()
        factory.return_value.__enter__.return_value = server
        with patch("signup.adapters.smtp.mailer.smtplib.SMTP_SSL", factory):
            await make_mailer(port=465).send_activation_email("user1@mail.com", "tok123")

        assert factory.call_args[0] == ("smtp.example.com", 465)
        server.sendmail.assert_called_once()
