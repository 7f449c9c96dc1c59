"""
Domain entities for the registration workflow.
"""

from dataclasses import dataclass


@dataclass
class User:
    """
    Registered user record.

    A user starts in the pending-activation state (``inactive=True``) with an
    activation token, and moves to the terminal active state once the token is
    redeemed. The plaintext password never reaches this object.
    """

    username: str
    email: str
    password_hash: str
    inactive: bool = True
    activation_token: str | None = None
    id: int | None = None

    @property
    def is_pending_activation(self) -> bool:
        return self.inactive and self.activation_token is not None
