"""
Console mailer adapter - Implements Mailer protocol.

This module provides a console-based implementation of the domain's
mailer port, logging activation tokens for local development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleMailer:
    """
    Implements Mailer protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - never fails to deliver.
    """

    def __init__(self, activation_base_url: str = "") -> None:
        self.activation_base_url = activation_base_url

    async def send_activation_email(self, email: str, token: str) -> None:
        """
        Log the activation token (simulates email delivery).

        The token is logged at INFO level to be visible in container logs.

        Args:
            email: Recipient email address (normalized by domain layer)
            token: Activation token
        """
        logger.info(
            "[ACTIVATION] Email: %s Token: %s Link: %s%s",
            email,
            token,
            self.activation_base_url,
            token,
        )
