"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request

from signup.config.settings import Settings, get_settings
from signup.domain.ports import Mailer, UserRepository
from signup.domain.registration import RegistrationService
from signup.domain.security import BcryptPasswordHasher, SecretTokenGenerator
from signup.domain.validation import RegistrationValidator

# Module-level singleton - SecretTokenGenerator is stateless
_token_generator = SecretTokenGenerator()


def get_repository(request: Request) -> UserRepository:
    """
    Get user repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_mailer(request: Request) -> Mailer:
    """Get mailer from app state."""
    return request.app.state.mailer


def get_password_hasher(settings: Settings = Depends(get_settings)) -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_cost)


def get_registration_validator(
    repository: UserRepository = Depends(get_repository),
) -> RegistrationValidator:
    return RegistrationValidator(repository)


def get_registration_service(
    repository: UserRepository = Depends(get_repository),
    mailer: Mailer = Depends(get_mailer),
    password_hasher: BcryptPasswordHasher = Depends(get_password_hasher),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, mailer, hasher and token generator for the domain service.
    """
    return RegistrationService(
        repository=repository,
        mailer=mailer,
        password_hasher=password_hasher,
        token_generator=_token_generator,
    )
