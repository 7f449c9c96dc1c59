"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory user repository
- A recording mailer that can be told to fail
- The canonical valid signup payload
"""

import pytest

from signup.adapters.repository.memory import InMemoryUserRepository
from signup.domain.exceptions import EmailDeliveryFailed


class RecordingMailer:
    """Mailer test double that records sent messages or fails on demand."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    async def send_activation_email(self, email: str, token: str) -> None:
        if self.fail:
            raise EmailDeliveryFailed(email)
        self.sent.append((email, token))


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def mailer() -> RecordingMailer:
    """Recording mailer for each test."""
    return RecordingMailer()


@pytest.fixture
def valid_user() -> dict[str, str]:
    """Signup payload that passes every validation rule."""
    return {
        "username": "user1",
        "email": "user1@mail.com",
        "password": "P4ssword",
    }
