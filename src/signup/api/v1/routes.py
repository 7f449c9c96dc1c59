"""
API v1 routes.

Defines REST endpoints for user signup and account activation:
- POST /api/1.0/users - Register a new inactive user and send the activation email
- POST /api/1.0/users/token/{token} - Activate the account holding the token
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from signup.api.dependencies import get_registration_service, get_registration_validator
from signup.api.models import MessageResponse, RegisterRequest, ValidationErrorResponse
from signup.domain.exceptions import ActivationFailed, EmailDeliveryFailed, EmailInUse
from signup.domain.registration import RegistrationService
from signup.domain.validation import RegistrationValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])

USER_CREATED = "User Created"
EMAIL_FAILURE = "Failed to deliver email"
EMAIL_IN_USE = "Email in use"
ACTIVATION_SUCCESS = "Success!"
ACTIVATION_FAILURE = "Account is either active or token is invalid"


def validation_error_response(errors: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"validationErrors": errors},
    )


@router.post(
    "/users",
    response_model=MessageResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        502: {"model": MessageResponse, "description": "Activation email could not be delivered"},
    },
    summary="Register a new user",
    description="Submit username, email and password. The account is created inactive "
    "and an activation token is sent to the provided email.",
)
async def register(
    request_data: RegisterRequest,
    validator: RegistrationValidator = Depends(get_registration_validator),
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register a new user and send the activation email.

    - **username**: 4 to 32 characters
    - **email**: Valid, unregistered email address
    - **password**: At least 6 characters, one uppercase, one lowercase and one digit
    """
    errors = await validator.validate(request_data.model_dump())
    if errors:
        return validation_error_response(errors)

    try:
        await service.register(request_data.username, request_data.email, request_data.password)
    except EmailInUse:
        # Lost a race against a concurrent signup after the pre-check passed
        return validation_error_response({"email": EMAIL_IN_USE})
    except EmailDeliveryFailed:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"message": EMAIL_FAILURE},
        )
    return MessageResponse(message=USER_CREATED)


@router.post(
    "/users/token/{token}",
    response_model=MessageResponse,
    responses={
        400: {"model": MessageResponse, "description": "Account is active or token is invalid"},
    },
    summary="Activate account with token",
    description="Redeem the activation token received by email.",
)
async def activate(
    token: str,
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Activate the account holding this token.

    Invalid tokens and already active accounts return the same error.
    """
    try:
        await service.activate(token)
    except ActivationFailed:
        logger.info("Rejected activation attempt")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": ACTIVATION_FAILURE},
        )
    return MessageResponse(message=ACTIVATION_SUCCESS)
