"""
Credential lifecycle domain service.

This module contains the core business logic for account registration,
login and password reset.

Credential Lifecycle (per account)
==================================

    [no account]            --register-->        [active, no reset]
    [active, no reset]      --request_reset-->   [active, reset pending]
    [active, reset pending] --complete_reset-->  [active, no reset]
    [active, reset pending] --expiry elapses-->  [active, reset expired]
    [active, reset expired] --request_reset-->   [active, reset pending]

Login is a read and is available from every active state.

Invariants:
- Passwords are stored only as bcrypt hashes.
- Reset tokens carry 256 bits of entropy, live for a bounded window and
  are cleared in the same write that changes the hash, so they cannot
  be replayed.
- Email uniqueness is guaranteed by the repository's unique constraint.
  The lookup before insert only produces a friendlier error.

Accepted gaps:
- request_reset raises NotFoundError for unknown emails, which confirms
  account existence to the caller.
- Emails are matched exactly as provided, without case folding.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import bcrypt

from .account import ResetState
from .exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    NotificationError,
    TokenError,
    ValidationError,
)
from .ports import AccountRepository, EmailSender, TokenSigner

logger = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72

_RESET_TOKEN_BYTES = 32

RESET_EMAIL_SUBJECT = "Password Reset Request"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LoginResult:
    """Session token and public profile returned by a successful login."""

    token: str
    user: dict[str, str]


@dataclass
class CredentialService:
    """
    Domain service for the credential lifecycle.

    Orchestrates registration, login and the two-step password reset.
    All collaborators are injected; the service holds no global state.
    """

    repository: AccountRepository
    email_sender: EmailSender
    token_signer: TokenSigner
    reset_url_base: str = "http://localhost:3000/reset-password"
    session_ttl_seconds: int = 3600
    reset_token_ttl_seconds: int = 900
    bcrypt_cost: int = 10
    clock: Callable[[], datetime] = field(default=_utcnow)

    def register(
        self, name: str, email: str, password: str, blood_group: str
    ) -> dict[str, str]:
        """
        Create a new account.

        Args:
            name: Display name
            email: Email address, unique across accounts
            password: Plaintext password (hashed before storage)
            blood_group: Free-form blood group label

        Returns:
            Public profile of the created account (no hash, no token)

        Raises:
            ValidationError: If any field is missing or empty
            ConflictError: If the email is already registered
        """
        if not (name and email and password and blood_group):
            raise ValidationError("Please fill all fields including blood group")
        self._check_password_length(password)

        if self.repository.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictError()

        password_hash = self._hash_password(password)
        account = self.repository.create(name, email, password_hash, blood_group)
        if account is None:
            # Lost the race against a concurrent registration
            logger.info("Registration rejected by unique constraint")
            raise ConflictError()

        logger.info("Account registered: id=%s", account.id)
        return account.public_profile()

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate with email and password and issue a session token.

        Raises:
            ValidationError: If email or password is missing
            NotFoundError: If no account has this email
            AuthError: If the password does not match
        """
        if not (email and password):
            raise ValidationError("Please provide email and password")

        account = self.repository.find_by_email(email)
        if account is None:
            raise NotFoundError()

        if not self._verify_password(password, account.password_hash):
            logger.warning("Login failed: bad password for id=%s", account.id)
            raise AuthError()

        token = self.token_signer.sign(
            {"sub": account.id, "userId": account.id, "email": account.email},
            self.session_ttl_seconds,
        )
        logger.info("Login succeeded: id=%s", account.id)
        return LoginResult(token=token, user=account.public_profile())

    def authenticate(self, session_token: str) -> dict[str, str]:
        """
        Resolve a session token to the public profile of its account.

        Raises:
            AuthError: If the token is missing, invalid or expired, or the
                account no longer exists
        """
        if not session_token:
            raise AuthError("Missing session token")
        claims = self.token_signer.verify(session_token)
        account = self.repository.find_by_id(str(claims.get("sub", "")))
        if account is None:
            raise AuthError("Invalid session token")
        return account.public_profile()

    def request_reset(self, email: str) -> datetime:
        """
        Issue a password reset token and email a link embedding it.

        The token is persisted before the email is sent. A delivery failure
        leaves the stored token valid.

        Returns:
            Expiry instant of the issued token

        Raises:
            ValidationError: If email is missing
            NotFoundError: If no account has this email
            NotificationError: If the reset email could not be sent
        """
        if not email:
            raise ValidationError("Please provide email")

        account = self.repository.find_by_email(email)
        if account is None:
            raise NotFoundError()

        now = self.clock()
        if account.reset_state(now) is not ResetState.NONE:
            logger.info("Replacing existing reset token for id=%s", account.id)

        token = self._generate_reset_token()
        expires_at = now + timedelta(seconds=self.reset_token_ttl_seconds)
        self.repository.set_reset_token(account.id, token, expires_at)
        logger.info("Reset token issued for id=%s, expires at %s", account.id, expires_at)

        try:
            self.email_sender.send(account.email, RESET_EMAIL_SUBJECT, self._reset_email_body(token))
        except Exception as e:
            logger.error("Reset email delivery failed for id=%s: %s", account.id, e)
            raise NotificationError() from e

        return expires_at

    def complete_reset(self, token: str, new_password: str) -> None:
        """
        Set a new password using a reset token.

        Unknown, expired and already-used tokens all fail the same way.

        Raises:
            ValidationError: If token or new password is missing
            TokenError: If no account holds this token unexpired
        """
        if not (token and new_password):
            raise ValidationError("Token and new password are required")
        self._check_password_length(new_password)

        password_hash = self._hash_password(new_password)
        if not self.repository.consume_reset_token(token, password_hash, self.clock()):
            logger.warning("Password reset rejected: invalid or expired token")
            raise TokenError()

        logger.info("Password reset completed")

    def _reset_email_body(self, token: str) -> str:
        link = f"{self.reset_url_base.rstrip('/')}/{token}"
        minutes = self.reset_token_ttl_seconds // 60
        return (
            "You requested a password reset.\n\n"
            f"Click the link below to set a new password:\n{link}\n\n"
            f"This link expires in {minutes} minutes. "
            "If you did not request a reset, ignore this email."
        )

    def _check_password_length(self, password: str) -> None:
        if len(password.encode()) > _BCRYPT_MAX_BYTES:
            raise ValidationError("Password is too long")

    def _generate_reset_token(self) -> str:
        """
        Generate a reset token with 256 bits of entropy.

        Uses secrets module for cryptographic randomness.
        """
        return secrets.token_hex(_RESET_TOKEN_BYTES)

    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()

    def _verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison via bcrypt. Malformed input never matches."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False
