"""
In-memory repository adapter - Implements UserRepository protocol.

Used for local development (STORAGE_BACKEND=memory) and tests. Each method
runs without awaiting anything, so on a single event loop every operation is
atomic and the email index behaves like a unique constraint.
"""

from dataclasses import replace
from itertools import count

from signup.domain.exceptions import EmailInUse
from signup.domain.models import User


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with plain dicts.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Returned users are copies; mutate state through the repository methods.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids_by_email: dict[str, int] = {}
        self._next_id = count(1)

    async def find_by_email(self, email: str) -> User | None:
        user_id = self._ids_by_email.get(email)
        return replace(self._users[user_id]) if user_id is not None else None

    async def find_by_token(self, token: str) -> User | None:
        for user in self._users.values():
            if user.activation_token == token:
                return replace(user)
        return None

    async def insert(self, user: User) -> User:
        if user.email in self._ids_by_email:
            raise EmailInUse(user.email)
        stored = replace(user, id=next(self._next_id))
        self._users[stored.id] = stored
        self._ids_by_email[stored.email] = stored.id
        return replace(stored)

    async def mark_active(self, user_id: int) -> bool:
        user = self._users.get(user_id)
        if user is None or not user.inactive:
            return False
        user.inactive = False
        user.activation_token = None
        return True

    async def delete(self, user_id: int) -> None:
        user = self._users.pop(user_id, None)
        if user is not None:
            del self._ids_by_email[user.email]

    async def delete_all(self) -> None:
        self._users.clear()
        self._ids_by_email.clear()
        self._next_id = count(1)

    async def find_all(self) -> list[User]:
        return [replace(self._users[user_id]) for user_id in sorted(self._users)]

    async def ping(self) -> None:
        return None
