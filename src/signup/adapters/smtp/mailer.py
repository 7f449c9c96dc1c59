"""
SMTP mailer adapter - Implements Mailer protocol over smtplib.

smtplib is blocking, so each send runs in a worker thread. Any failure while
handing the message to the relay (connection refused, auth rejected, recipient
refused, timeout, an SMTPUTF8 address the relay cannot encode) is reported to
the domain as EmailDeliveryFailed.
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from signup.domain.exceptions import EmailDeliveryFailed

logger = logging.getLogger(__name__)

ACTIVATION_SUBJECT = "Account Activation"


def build_activation_message(
    sender: str, email: str, token: str, activation_base_url: str
) -> MIMEMultipart:
    """Compose the activation email with plain-text and HTML parts."""
    link = f"{activation_base_url}{token}"
    text_body = (
        f"Hello {email},\n\n"
        "Please activate your account with the token below:\n\n"
        f"{token}\n\n"
        f"or follow this link: {link}\n"
    )
    html_body = (
        "<div>"
        "<b>Please click below link to activate your account</b>"
        "</div>"
        f"<div>Account: {email}</div>"
        f"<div>Token: {token}</div>"
        f'<div><a href="{link}">Activate</a></div>'
    )

    message = MIMEMultipart("alternative")
    message["Subject"] = ACTIVATION_SUBJECT
    message["From"] = sender
    message["To"] = email
    message.attach(MIMEText(text_body, "plain", "utf-8"))
    message.attach(MIMEText(html_body, "html", "utf-8"))
    return message


class SmtpMailer:
    """
    Implements Mailer protocol via an SMTP relay.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
        activation_base_url: str = "",
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout
        self.activation_base_url = activation_base_url

    async def send_activation_email(self, email: str, token: str) -> None:
        """
        Send the activation email through the SMTP relay.

        Raises:
            EmailDeliveryFailed: If the relay cannot be reached or rejects the message
        """
        try:
            message = build_activation_message(self.sender, email, token, self.activation_base_url)
            await asyncio.to_thread(self._send, email, message)
        except Exception as exc:
            logger.error("SMTP delivery to %s via %s:%s failed: %s", email, self.host, self.port, exc)
            raise EmailDeliveryFailed(email) from exc

    def _send(self, email: str, message: MIMEMultipart) -> None:
        if self.port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context) as server:
                self._deliver(server, email, message)
            return

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
            self._deliver(server, email, message)

    def _deliver(self, server: smtplib.SMTP, email: str, message: MIMEMultipart) -> None:
        if self.username:
            server.login(self.username, self.password)
        server.sendmail(self.sender, [email], message.as_string())
