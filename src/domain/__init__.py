"""
Domain layer - Pure business logic with zero framework imports.

This package contains the credential lifecycle: registration, login and
password reset. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .account import Account, ResetState
from .credentials import CredentialService, LoginResult
from .exceptions import (
    AuthError,
    ConflictError,
    CredentialError,
    InternalError,
    NotFoundError,
    NotificationError,
    TokenError,
    ValidationError,
)
from .ports import AccountRepository, EmailSender, TokenSigner

__all__ = [
    "Account",
    "AccountRepository",
    "AuthError",
    "ConflictError",
    "CredentialError",
    "CredentialService",
    "EmailSender",
    "InternalError",
    "LoginResult",
    "NotFoundError",
    "NotificationError",
    "ResetState",
    "TokenError",
    "TokenSigner",
    "ValidationError",
]
