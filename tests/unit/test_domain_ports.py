"""
Unit tests for the account entity, domain exceptions and ports.

Tests verify:
- Reset state derivation
- Public profile never exposes credentials
- Exception taxonomy and status codes
- Port interfaces are properly defined
- Domain purity (zero framework imports)
"""

import json
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path

import pytest

from src.domain.account import Account, ResetState
from src.domain.exceptions import (
    AuthError,
    ConflictError,
    CredentialError,
    InternalError,
    NotFoundError,
    NotificationError,
    TokenError,
    ValidationError,
)
from src.domain.ports import AccountRepository, EmailSender, TokenSigner

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
DOMAIN_DIR = Path(__file__).resolve().parents[2] / "src" / "domain"


def make_account(**overrides) -> Account:
    fields = {
        "id": "acc-1",
        "name": "Alice",
        "email": "a@x.com",
        "password_hash": "$2b$10$hash",
        "blood_group": "O+",
    }
    fields.update(overrides)
    return Account(**fields)


class TestResetStateEnum:
    """Tests for ResetState enum."""

    def test_reset_state_is_str_enum(self) -> None:
        assert issubclass(ResetState, Enum)
        assert issubclass(ResetState, str)

    def test_reset_state_json_serializable(self) -> None:
        assert json.dumps(ResetState.PENDING) == '"PENDING"'


class TestAccountResetState:
    """Tests for Account.reset_state derivation."""

    def test_no_token_is_none(self) -> None:
        assert make_account().reset_state(NOW) is ResetState.NONE

    def test_future_expiry_is_pending(self) -> None:
        account = make_account(reset_token="t", reset_token_expires_at=NOW + timedelta(seconds=1))
        assert account.reset_state(NOW) is ResetState.PENDING

    def test_expiry_instant_is_expired(self) -> None:
        """The token is no longer honored at the expiry instant itself."""
        account = make_account(reset_token="t", reset_token_expires_at=NOW)
        assert account.reset_state(NOW) is ResetState.EXPIRED

    def test_past_expiry_is_expired(self) -> None:
        account = make_account(reset_token="t", reset_token_expires_at=NOW - timedelta(minutes=1))
        assert account.reset_state(NOW) is ResetState.EXPIRED


class TestPublicProfile:
    """Tests for Account.public_profile."""

    def test_profile_fields(self) -> None:
        assert make_account().public_profile() == {
            "id": "acc-1",
            "name": "Alice",
            "email": "a@x.com",
            "bloodGroup": "O+",
        }

    def test_profile_excludes_credentials(self) -> None:
        account = make_account(reset_token="secret", reset_token_expires_at=NOW)
        values = account.public_profile().values()

        assert "$2b$10$hash" not in values
        assert "secret" not in values


class TestDomainExceptions:
    """Tests for the exception taxonomy."""

    @pytest.mark.parametrize(
        "exc_class,status",
        [
            (ValidationError, 400),
            (ConflictError, 400),
            (NotFoundError, 404),
            (AuthError, 401),
            (TokenError, 400),
            (InternalError, 500),
            (NotificationError, 500),
        ],
    )
    def test_status_codes(self, exc_class: type[CredentialError], status: int) -> None:
        assert issubclass(exc_class, CredentialError)
        assert exc_class.status_code == status

    def test_default_message(self) -> None:
        assert ConflictError().message == "User already exists"
        assert str(NotFoundError()) == "User not found"

    def test_custom_message(self) -> None:
        assert ValidationError("Please provide email").message == "Please provide email"

    def test_notification_error_is_internal(self) -> None:
        assert issubclass(NotificationError, InternalError)


class TestPorts:
    """Tests for port interfaces."""

    def test_account_repository_methods(self) -> None:
        for name in (
            "create",
            "find_by_email",
            "find_by_id",
            "set_reset_token",
            "consume_reset_token",
        ):
            assert hasattr(AccountRepository, name)

    def test_email_sender_method(self) -> None:
        assert hasattr(EmailSender, "send")

    def test_token_signer_methods(self) -> None:
        assert hasattr(TokenSigner, "sign")
        assert hasattr(TokenSigner, "verify")


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize("framework", ["fastapi", "pydantic", "psycopg", "jose"])
    def test_no_framework_imports_in_domain(self, framework: str) -> None:
        for source in DOMAIN_DIR.glob("*.py"):
            text = source.read_text()
            assert f"from {framework}" not in text, f"{framework} import in {source.name}"
            assert f"import {framework}" not in text, f"{framework} import in {source.name}"
