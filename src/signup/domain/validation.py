"""
Registration input validation.

Each field is checked by an ordered list of rules. Evaluation of a field
stops at its first failing rule; every field is always evaluated. The result
maps field name to a single message, in the declaration order of the fields:

    username -> email -> password

Rule checks may be plain callables or coroutine functions, so lookups against
storage (the email uniqueness check) run without blocking the event loop.
"""

import inspect
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .ports import UserRepository

USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 32
PASSWORD_MIN_LENGTH = 6

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")

Check = Callable[[Any], bool | Awaitable[bool]]


@dataclass(frozen=True)
class Rule:
    """A predicate paired with the message reported when it fails."""

    check: Check
    message: str

    async def passes(self, value: Any) -> bool:
        result = self.check(value)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def is_present(value: Any) -> bool:
    return value is not None and value != ""


def has_length(minimum: int, maximum: int | None = None) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        length = len(str(value))
        return length >= minimum and (maximum is None or length <= maximum)

    return check


def is_email(value: Any) -> bool:
    # Syntax only; deliverability (DNS) is proven by the activation email itself.
    try:
        validate_email(str(value), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_strong_password(value: Any) -> bool:
    text = str(value)
    return all(pattern.search(text) for pattern in (_UPPERCASE, _LOWERCASE, _DIGIT))


class RegistrationValidator:
    """
    Validates raw signup input.

    The email uniqueness rule is delegated to the injected repository and
    only runs once the address is syntactically valid.
    """

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository
        self.rules: dict[str, list[Rule]] = {
            "username": [
                Rule(is_present, "Username cannot be null"),
                Rule(
                    has_length(USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH),
                    "Must have min 4 and max 32 characters",
                ),
            ],
            "email": [
                Rule(is_present, "Email cannot be null"),
                Rule(is_email, "Email is not valid"),
                Rule(self._email_not_in_use, "Email in use"),
            ],
            "password": [
                Rule(is_present, "Password cannot be null"),
                Rule(has_length(PASSWORD_MIN_LENGTH), "Password must be at least 6 characters"),
                Rule(
                    is_strong_password,
                    "Password must have at least one uppercase, 1 lowercase letter and one number",
                ),
            ],
        }

    async def validate(self, data: Mapping[str, Any]) -> dict[str, str]:
        """
        Run every field's rules and collect the first failure per field.

        Args:
            data: Raw input; missing keys are treated as null

        Returns:
            Ordered mapping of field name to error message, empty when valid
        """
        errors: dict[str, str] = {}
        for field, rules in self.rules.items():
            value = data.get(field)
            for rule in rules:
                if not await rule.passes(value):
                    errors[field] = rule.message
                    break
        return errors

    async def _email_not_in_use(self, email: str) -> bool:
        return await self.repository.find_by_email(normalize_email(email)) is None
