"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from typing import Any, Protocol

from .account import Account


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def create(
        self, name: str, email: str, password_hash: str, blood_group: str
    ) -> Account | None:
        """
        Insert a new account with no pending reset.

        The store enforces email uniqueness; a concurrent insert for the
        same email loses at the constraint, not at an application check.

        Args:
            name: Display name
            email: Email address, stored exactly as given
            password_hash: bcrypt hash of the password
            blood_group: Free-form blood group label

        Returns:
            The created Account, or None if the email is already taken
        """
        ...

    def find_by_email(self, email: str) -> Account | None:
        """Return the account with this exact email, or None."""
        ...

    def find_by_id(self, account_id: str) -> Account | None:
        """Return the account with this id, or None."""
        ...

    def set_reset_token(self, account_id: str, token: str, expires_at: datetime) -> None:
        """
        Store a reset token and its expiry, replacing any previous token.

        Both fields are written in one statement.
        """
        ...

    def consume_reset_token(self, token: str, password_hash: str, now: datetime) -> bool:
        """
        Atomically apply a password reset.

        Matches the account whose reset token equals `token` and whose
        expiry is after `now`, sets the new hash and clears both reset
        fields in a single write.

        Returns:
            True if an account was updated, False if no unexpired token matched
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, recipient: str, subject: str, body: str) -> None:
        """
        Deliver a plain-text message.

        Raises:
            Any exception on transport failure; the domain wraps it.
        """
        ...


class TokenSigner(Protocol):
    """Port interface for session token issuance and verification."""

    def sign(self, claims: dict[str, Any], expires_in_seconds: int) -> str:
        """Return an opaque bearer token carrying `claims` and an expiry."""
        ...

    def verify(self, token: str) -> dict[str, Any]:
        """
        Return the claims of a valid token.

        Raises:
            AuthError: If the token is malformed, tampered with or expired
        """
        ...
