"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .models import User


class UserRepository(Protocol):
    """Port interface for user persistence."""

    async def find_by_email(self, email: str) -> User | None:
        """
        Look up a user by normalized email address.

        Args:
            email: Normalized email address

        Returns:
            The stored user, or None if no user owns this email
        """
        ...

    async def find_by_token(self, token: str) -> User | None:
        """
        Look up a user by activation token.

        Args:
            token: Activation token sent by email

        Returns:
            The stored user, or None if no user holds this token
        """
        ...

    async def insert(self, user: User) -> User:
        """
        Persist a new user.

        Uniqueness of the email is enforced by the store itself, so two
        concurrent inserts for the same address cannot both succeed.

        Args:
            user: User to persist (``id`` is ignored)

        Returns:
            The stored user with its assigned ``id``

        Raises:
            EmailInUse: If the email is already stored
            UserStoreError: On any other storage failure
        """
        ...

    async def mark_active(self, user_id: int) -> bool:
        """
        Flip a pending user to active and clear its activation token.

        The update is conditional on the user still being inactive, which
        makes concurrent activations of the same user resolve to a single
        winner.

        Args:
            user_id: Id of the user to activate

        Returns:
            True if this call performed the transition, False otherwise
        """
        ...

    async def delete(self, user_id: int) -> None:
        """Delete a user by id. Deleting a missing id is a no-op."""
        ...

    async def delete_all(self) -> None:
        """Remove every user. Reset tooling only, not a production path."""
        ...

    async def find_all(self) -> list[User]:
        """Return every stored user ordered by id."""
        ...

    async def ping(self) -> None:
        """Raise if the store is unreachable."""
        ...


class Mailer(Protocol):
    """Port interface for email delivery."""

    async def send_activation_email(self, email: str, token: str) -> None:
        """
        Send the account activation email.

        Args:
            email: Recipient email address
            token: Activation token to include in the message

        Raises:
            EmailDeliveryFailed: If the transport rejects or cannot send the message
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


class TokenGenerator(Protocol):
    """Port interface for activation token generation."""

    def generate(self) -> str: ...
