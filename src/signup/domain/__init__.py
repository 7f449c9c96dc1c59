"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for user signup and
account activation. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    ActivationFailed,
    EmailDeliveryFailed,
    EmailInUse,
    RegistrationError,
    UserStoreError,
)
from .models import User
from .ports import Mailer, PasswordHasher, TokenGenerator, UserRepository
from .registration import RegistrationService
from .security import BcryptPasswordHasher, SecretTokenGenerator
from .validation import RegistrationValidator, normalize_email

__all__ = [
    "ActivationFailed",
    "BcryptPasswordHasher",
    "EmailDeliveryFailed",
    "EmailInUse",
    "Mailer",
    "PasswordHasher",
    "RegistrationError",
    "RegistrationService",
    "RegistrationValidator",
    "SecretTokenGenerator",
    "TokenGenerator",
    "User",
    "UserRepository",
    "UserStoreError",
    "normalize_email",
]
