"""
Domain exceptions - Semantic error types for the credential lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each exception carries the HTTP status and the caller-safe message
the API layer returns.
"""


class CredentialError(Exception):
    """Base class for credential lifecycle errors."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CredentialError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(CredentialError):
    """An account already exists for the email."""

    status_code = 400
    default_message = "User already exists"


class NotFoundError(CredentialError):
    """No account matches the email."""

    status_code = 404
    default_message = "User not found"


class AuthError(CredentialError):
    """Password or session token mismatch."""

    status_code = 401
    default_message = "Invalid password"


class TokenError(CredentialError):
    """Reset token unknown, expired or already used."""

    status_code = 400
    default_message = "Invalid or expired token"


class InternalError(CredentialError):
    """Store or transport failure. Never exposes the cause to callers."""

    status_code = 500
    default_message = "Server error"


class NotificationError(InternalError):
    """Email dispatch failed after the reset token was stored."""

    default_message = "Failed to send reset email"
