"""
Security primitives - password hashing and activation tokens.
"""

import base64
import hashlib
import secrets

import bcrypt


def _prehash(password: str) -> bytes:
    """
    Reduce a password of any length to 44 ASCII bytes.

    bcrypt only reads the first 72 bytes (and bcrypt >= 5 rejects longer
    input), so the SHA-256 digest is hashed instead of the raw password.
    Base64 keeps NUL bytes out of the bcrypt input.
    """
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


class BcryptPasswordHasher:
    """
    Implements PasswordHasher protocol via bcrypt over a SHA-256 prehash.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())


class SecretTokenGenerator:
    """
    Implements TokenGenerator protocol via the secrets module.

    Tokens are hex strings carrying ``nbytes`` of cryptographic randomness,
    which keeps collisions negligible and the value safe in URL paths.
    """

    def __init__(self, nbytes: int = 16) -> None:
        self._nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_hex(self._nbytes)
