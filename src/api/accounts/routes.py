"""
Accounts API routes.

Defines REST endpoints for registration, login and password reset.
Domain errors propagate to the handlers in src.api.errors.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_credential_service, get_session_token
from src.api.models import (
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    ResetPasswordRequest,
)
from src.domain.credentials import CredentialService

router = APIRouter(tags=["accounts"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing field or user already exists"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    summary="Register a new user",
)
def register(
    request_data: RegisterRequest,
    service: CredentialService = Depends(get_credential_service),
) -> MessageResponse:
    """
    Register a new user.

    - **name**, **email**, **password**, **bloodGroup**: all required
    """
    service.register(
        request_data.name or "",
        request_data.email or "",
        request_data.password or "",
        request_data.blood_group or "",
    )
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing email or password"},
        401: {"model": ErrorResponse, "description": "Invalid password"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Log in and receive a session token",
)
def login(
    request_data: LoginRequest,
    service: CredentialService = Depends(get_credential_service),
) -> dict:
    """
    Authenticate with email and password.

    Returns a bearer token valid for one hour and the public profile.
    """
    result = service.login(request_data.email or "", request_data.password or "")
    return {"message": "Login successful", "token": result.token, "user": result.user}


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing email"},
        404: {"model": ErrorResponse, "description": "User not found"},
        500: {"model": ErrorResponse, "description": "Reset email could not be sent"},
    },
    summary="Request a password reset email",
)
def forgot_password(
    request_data: ForgotPasswordRequest,
    service: CredentialService = Depends(get_credential_service),
) -> MessageResponse:
    """Email a single-use reset link valid for 15 minutes."""
    service.request_reset(request_data.email or "")
    return MessageResponse(message="Password reset email sent")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing field or invalid/expired token"},
    },
    summary="Set a new password with a reset token",
)
def reset_password(
    request_data: ResetPasswordRequest,
    service: CredentialService = Depends(get_credential_service),
) -> MessageResponse:
    service.complete_reset(request_data.token or "", request_data.new_password or "")
    return MessageResponse(message="Password has been reset successfully")


@router.get(
    "/me",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid session token"}},
    summary="Get the account for the current session token",
)
def me(
    token: str = Depends(get_session_token),
    service: CredentialService = Depends(get_credential_service),
) -> dict:
    return {"user": service.authenticate(token)}
