"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional at this layer; presence and emptiness are
checked by the domain service so missing fields map to 400, not 422.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    password: str | None = None
    blood_group: str | None = Field(default=None, alias="bloodGroup")


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(BaseModel):
    """Request model for a password reset request."""

    email: str | None = None


class ResetPasswordRequest(BaseModel):
    """Request model for completing a password reset."""

    model_config = ConfigDict(populate_by_name=True)

    token: str | None = None
    new_password: str | None = Field(default=None, alias="newPassword")


class UserProfile(BaseModel):
    """Public account profile. Never carries credentials."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    blood_group: str = Field(alias="bloodGroup")


class MessageResponse(BaseModel):
    """Response model for operations that only confirm success."""

    message: str


class LoginResponse(BaseModel):
    """Response model for successful login."""

    message: str
    token: str
    user: UserProfile


class ProfileResponse(BaseModel):
    """Response model for the current session's account."""

    user: UserProfile


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
