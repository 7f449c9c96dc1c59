"""
API request and response models.

Pydantic models for FastAPI endpoint parsing and OpenAPI schema generation.
Field rules live in the domain validator so that every failure is reported
in the same ``validationErrors`` shape; the request model only parses.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    # Unknown keys (e.g. a client-supplied "inactive") are dropped.
    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(None, description="4 to 32 characters")
    email: str | None = Field(None, description="Email address, must not be registered yet")
    password: str | None = Field(
        None,
        description="At least 6 characters with an uppercase letter, a lowercase letter and a digit",
    )


class MessageResponse(BaseModel):
    """Response model carrying a human readable outcome."""

    message: str


class ValidationErrorResponse(BaseModel):
    """Per-field validation errors, in username, email, password order."""

    validationErrors: dict[str, str]
