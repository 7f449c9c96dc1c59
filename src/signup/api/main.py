"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routes and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import AsyncConnectionPool

from signup.adapters.repository import (
    MIGRATIONS_DIR,
    InMemoryUserRepository,
    PostgresUserRepository,
    run_migrations,
)
from signup.adapters.smtp import ConsoleMailer, SmtpMailer
from signup.api.v1 import router as v1_router
from signup.config.logging import configure_logging
from signup.config.settings import Settings, get_settings
from signup.domain.ports import Mailer

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "User signup API 1.0 - Register and activate user accounts",
    },
]


def build_mailer(settings: Settings) -> Mailer:
    """Select the mail adapter named by MAIL_BACKEND."""
    if settings.mail_backend == "smtp":
        return SmtpMailer(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_user,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
            activation_base_url=settings.activation_base_url,
        )
    return ConsoleMailer(activation_base_url=settings.activation_base_url)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the user repository (database pool + migrations for postgres)
    - Creates the mailer
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting application...")

    pool = None
    if settings.storage_backend == "memory":
        logger.info("Using in-memory user storage")
        app.state.repository = InMemoryUserRepository()
    else:
        logger.info("Connecting to database...")
        # Create connection pool with explicit sizing
        pool = AsyncConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=False,
        )
        await pool.open()

        logger.info("Running database migrations...")
        await run_migrations(pool, settings.migrations_dir or MIGRATIONS_DIR)

        app.state.repository = PostgresUserRepository(pool)

    app.state.mailer = build_mailer(settings)
    logger.info("Mail backend: %s", settings.mail_backend)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        await pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="signup",
    description="User signup API - Registration with email activation",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/api/1.0")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with storage validation.

    Returns 200 OK if application and storage are healthy.
    Raises exception if the storage backend is unreachable.
    """
    await request.app.state.repository.ping()
    return {"status": "healthy"}
