"""
Registration domain service - signup and activation workflow.

This module contains the core business logic for user registration.

Account State Machine
=====================

States:
- PENDING: Initial state after signup (inactive=True, activation token set)
- ACTIVE: Terminal state after the activation token is redeemed

Valid Transitions:
    PENDING -> ACTIVE   (activation with the matching token)

Invalid Transitions (reported as ActivationFailed, no mutation):
    ACTIVE -> any       (ACTIVE is terminal)
    unknown token       (no user holds it)

Atomicity of signup
===================

A user is kept only if the activation email was handed to the mailer.
Persistence happens first so the storage unique constraint can reject a
racing duplicate before any email goes out; a delivery failure then triggers
a compensating delete. A process crash between the failed send and the
delete can leave one inactive record behind.
"""

import asyncio
import logging
from dataclasses import dataclass

from .exceptions import ActivationFailed, UserStoreError
from .models import User
from .ports import Mailer, PasswordHasher, TokenGenerator, UserRepository
from .validation import normalize_email

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: email normalization,
    password hashing, token generation, persistence and email dispatch.
    """

    repository: UserRepository
    mailer: Mailer
    password_hasher: PasswordHasher
    token_generator: TokenGenerator

    async def register(self, username: str, email: str, password: str) -> User:
        """
        Register a new inactive user and send the activation email.

        Input is expected to have passed RegistrationValidator.

        Args:
            username: Requested username
            email: User's email address (will be normalized)
            password: User's password (will be hashed)

        Returns:
            The stored user

        Raises:
            EmailInUse: If another registration stored the email first
            EmailDeliveryFailed: If the activation email could not be sent.
                Any mailer failure removes the stored user before propagating
            UserStoreError: On unexpected storage failure
        """
        normalized_email = normalize_email(email)
        # bcrypt is deliberately slow; keep it off the event loop.
        password_hash = await asyncio.to_thread(self.password_hasher.hash, password)
        user = User(
            username=username,
            email=normalized_email,
            password_hash=password_hash,
            inactive=True,
            activation_token=self.token_generator.generate(),
        )

        user = await self.repository.insert(user)

        try:
            await self.mailer.send_activation_email(user.email, user.activation_token)
        except Exception:
            # Any failure past insert must not leave the user stored.
            logger.warning("Activation email failed for user %s, rolling back", user.id)
            await self._rollback(user)
            raise

        logger.info("Registered user %s", user.id)
        return user

    async def _rollback(self, user: User) -> None:
        """
        Compensating delete for a user whose activation email was not sent.

        A failed delete is logged and left for cleanup; the caller re-raises
        the original send failure so the client still sees the delivery error.
        """
        try:
            await self.repository.delete(user.id)
        except UserStoreError:
            logger.exception("Rollback failed, user %s (%s) left orphaned", user.id, user.email)

    async def activate(self, token: str) -> User:
        """
        Redeem an activation token.

        Unknown tokens and already active accounts fail the same way so the
        outcome reveals nothing about which tokens exist.

        Args:
            token: Activation token from the email

        Returns:
            The activated user

        Raises:
            ActivationFailed: If no pending user holds the token, or another
                request activated it first
        """
        user = await self.repository.find_by_token(token)
        if user is None or not user.is_pending_activation:
            raise ActivationFailed("Account is either active or token is invalid")

        if not await self.repository.mark_active(user.id):
            raise ActivationFailed("Account is either active or token is invalid")

        user.inactive = False
        user.activation_token = None
        logger.info("Activated user %s", user.id)
        return user
