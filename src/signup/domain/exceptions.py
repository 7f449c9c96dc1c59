"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class EmailInUse(RegistrationError):
    """Email already belongs to a stored user (storage-level conflict)."""

    pass


class EmailDeliveryFailed(RegistrationError):
    """Activation email could not be handed to the mail transport."""

    pass


class ActivationFailed(RegistrationError):
    """Token is unknown or the account is already active."""

    pass


class UserStoreError(RegistrationError):
    """Unexpected failure in the user storage backend."""

    pass
