"""
Unit tests for domain ports, models and exceptions.

Tests verify:
- Exceptions are properly structured
- Adapters satisfy the port protocols
- Domain purity (zero framework imports)
"""

import subprocess
from pathlib import Path

import pytest

from signup.adapters.repository import InMemoryUserRepository, PostgresUserRepository
from signup.adapters.smtp import ConsoleMailer, SmtpMailer
from signup.domain.exceptions import (
    ActivationFailed,
    EmailDeliveryFailed,
    EmailInUse,
    RegistrationError,
    UserStoreError,
)
from signup.domain.models import User
from signup.domain.ports import Mailer, UserRepository

DOMAIN_DIR = Path(__file__).resolve().parents[2] / "src" / "signup" / "domain"


class TestExceptions:
    """Tests for the domain exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_type", [EmailInUse, EmailDeliveryFailed, ActivationFailed, UserStoreError]
    )
    def test_subclass_of_registration_error(self, exc_type: type) -> None:
        assert issubclass(exc_type, RegistrationError)

    def test_registration_error_is_exception(self) -> None:
        assert issubclass(RegistrationError, Exception)

    def test_email_in_use_carries_email(self) -> None:
        with pytest.raises(EmailInUse) as exc_info:
            raise EmailInUse("user@example.com")
        assert "user@example.com" in str(exc_info.value)


class TestUserModel:
    """Tests for the User entity defaults."""

    def test_new_user_defaults_inactive(self) -> None:
        user = User(username="user1", email="u@example.com", password_hash="h")
        assert user.inactive is True
        assert user.id is None

    def test_pending_activation(self) -> None:
        user = User(username="user1", email="u@example.com", password_hash="h", activation_token="t")
        assert user.is_pending_activation is True

        user.inactive = False
        assert user.is_pending_activation is False


class TestProtocolCompliance:
    """Adapters use structural subtyping, not inheritance."""

    @pytest.mark.parametrize("adapter", [InMemoryUserRepository, PostgresUserRepository])
    def test_repository_methods(self, adapter: type) -> None:
        for name in (
            "find_by_email",
            "find_by_token",
            "insert",
            "mark_active",
            "delete",
            "delete_all",
            "find_all",
            "ping",
        ):
            assert callable(getattr(adapter, name)), name
            assert hasattr(UserRepository, name)

    @pytest.mark.parametrize("adapter", [ConsoleMailer, SmtpMailer])
    def test_mailer_methods(self, adapter: type) -> None:
        assert callable(adapter.send_activation_email)
        assert hasattr(Mailer, "send_activation_email")

    @pytest.mark.parametrize(
        "adapter", [InMemoryUserRepository, PostgresUserRepository, ConsoleMailer, SmtpMailer]
    )
    def test_no_explicit_inheritance(self, adapter: type) -> None:
        assert adapter.__bases__ == (object,)


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize(
        "pattern",
        ["from fastapi", "import fastapi", "from pydantic", "import pydantic", "from psycopg", "import psycopg"],
    )
    def test_no_framework_imports_in_domain(self, pattern: str) -> None:
        result = subprocess.run(
            ["grep", "-r", pattern, str(DOMAIN_DIR)],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"Framework import found: {result.stdout}"
