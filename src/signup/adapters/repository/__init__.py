"""Repository adapters - Storage implementations."""

from .memory import InMemoryUserRepository
from .postgres import MIGRATIONS_DIR, PostgresUserRepository, run_migrations

__all__ = ["MIGRATIONS_DIR", "InMemoryUserRepository", "PostgresUserRepository", "run_migrations"]
