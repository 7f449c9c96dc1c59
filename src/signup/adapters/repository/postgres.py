"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 (async) with raw SQL.

Uniqueness:
-----------
The ``users.email`` column carries a UNIQUE constraint. The validator's
pre-check catches the common duplicate case, but two concurrent signups for
the same address can both pass it; the constraint makes the second INSERT
fail, which is surfaced to the domain as EmailInUse.

Activation:
-----------
mark_active() is a single conditional UPDATE (``WHERE inactive``), so of
several concurrent activations only the first one to commit changes a row.
"""

import logging
from pathlib import Path

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from signup.domain.exceptions import EmailInUse, UserStoreError
from signup.domain.models import User

logger = logging.getLogger(__name__)

# SQL files ship inside the package so wheel installs can migrate too
MIGRATIONS_DIR = Path(__file__).parent / "migrations"

_COLUMNS = "id, username, email, password_hash, inactive, activation_token"


def _to_user(row: dict) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        password_hash=row["password_hash"],
        inactive=row["inactive"],
        activation_token=row["activation_token"],
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
        """
        self._pool = pool

    async def find_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_COLUMNS} FROM users WHERE email = %s"
        return await self._fetch_one(sql, (email,))

    async def find_by_token(self, token: str) -> User | None:
        sql = f"SELECT {_COLUMNS} FROM users WHERE activation_token = %s"
        return await self._fetch_one(sql, (token,))

    async def insert(self, user: User) -> User:
        """
        Insert a new user row.

        Relies on the UNIQUE (email) constraint rather than a prior lookup,
        so concurrent registrations cannot both store the same address.

        Raises:
            EmailInUse: On unique constraint violation
            UserStoreError: On any other database error
        """
        sql = f"""
            INSERT INTO users (username, email, password_hash, inactive, activation_token)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
        """
        params = (
            user.username,
            user.email,
            user.password_hash,
            user.inactive,
            user.activation_token,
        )
        try:
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(sql, params)
                row = await cursor.fetchone()
        except psycopg.errors.UniqueViolation as exc:
            raise EmailInUse(user.email) from exc
        except psycopg.Error as exc:
            raise _store_error("insert", exc) from exc
        return _to_user(row)

    async def mark_active(self, user_id: int) -> bool:
        sql = """
            UPDATE users
            SET inactive = FALSE, activation_token = NULL
            WHERE id = %s AND inactive = TRUE
        """
        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(sql, (user_id,))
                return cursor.rowcount == 1
        except psycopg.Error as exc:
            raise _store_error("mark_active", exc) from exc

    async def delete(self, user_id: int) -> None:
        await self._execute("delete", "DELETE FROM users WHERE id = %s", (user_id,))

    async def delete_all(self) -> None:
        await self._execute("delete_all", "TRUNCATE users RESTART IDENTITY")

    async def find_all(self) -> list[User]:
        try:
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(f"SELECT {_COLUMNS} FROM users ORDER BY id")
                rows = await cursor.fetchall()
        except psycopg.Error as exc:
            raise _store_error("find_all", exc) from exc
        return [_to_user(row) for row in rows]

    async def ping(self) -> None:
        await self._execute("ping", "SELECT 1")

    async def _execute(self, operation: str, sql: str, params: tuple = ()) -> None:
        try:
            async with self._pool.connection() as conn:
                await conn.execute(sql, params or None)
        except psycopg.Error as exc:
            raise _store_error(operation, exc) from exc

    async def _fetch_one(self, sql: str, params: tuple) -> User | None:
        try:
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(sql, params)
                row = await cursor.fetchone()
        except psycopg.Error as exc:
            raise _store_error("lookup", exc) from exc
        return _to_user(row) if row is not None else None


def _store_error(operation: str, exc: psycopg.Error) -> UserStoreError:
    logger.error("User store %s failed: %s", operation, exc)
    return UserStoreError(f"{operation} failed")


async def run_migrations(pool: AsyncConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 AsyncConnectionPool instance
        migrations_dir: Directory holding the ``*.sql`` files; defaults to
            the migrations shipped inside this package
    """
    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            async with pool.connection() as conn:
                await conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
