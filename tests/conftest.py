"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory AccountRepository with the same atomicity guarantees
  as the PostgreSQL adapter
- A controllable clock for expiry tests
- A credential service wired to both
- A PostgreSQL connection pool for integration and adversarial tests
"""

import threading
import uuid
from collections.abc import Callable, Generator
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.adapters.tokens.jwt_signer import JoseTokenSigner
from src.config.settings import get_settings
from src.domain.account import Account
from src.domain.credentials import CredentialService

TEST_JWT_SECRET = "test-secret-with-enough-length-for-hs256"


class InMemoryAccountRepository:
    """AccountRepository fake backed by a dict, guarded by one lock."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def create(
        self, name: str, email: str, password_hash: str, blood_group: str
    ) -> Account | None:
        with self._lock:
            if any(a.email == email for a in self._accounts.values()):
                return None
            account = Account(
                id=str(uuid.uuid4()),
                name=name,
                email=email,
                password_hash=password_hash,
                blood_group=blood_group,
            )
            self._accounts[account.id] = account
            return account

    def find_by_email(self, email: str) -> Account | None:
        with self._lock:
            return next((a for a in self._accounts.values() if a.email == email), None)

    def find_by_id(self, account_id: str) -> Account | None:
        with self._lock:
            return self._accounts.get(account_id)

    def set_reset_token(self, account_id: str, token: str, expires_at: datetime) -> None:
        with self._lock:
            account = self._accounts[account_id]
            self._accounts[account_id] = replace(
                account, reset_token=token, reset_token_expires_at=expires_at
            )

    def consume_reset_token(self, token: str, password_hash: str, now: datetime) -> bool:
        with self._lock:
            for account in self._accounts.values():
                if (
                    account.reset_token == token
                    and account.reset_token_expires_at is not None
                    and account.reset_token_expires_at > now
                ):
                    self._accounts[account.id] = replace(
                        account,
                        password_hash=password_hash,
                        reset_token=None,
                        reset_token_expires_at=None,
                    )
                    return True
            return False


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def email_sender() -> Mock:
    return Mock()


@pytest.fixture
def token_signer() -> JoseTokenSigner:
    return JoseTokenSigner(TEST_JWT_SECRET)


@pytest.fixture
def service(
    repository: InMemoryAccountRepository,
    email_sender: Mock,
    token_signer: JoseTokenSigner,
    clock: FakeClock,
) -> CredentialService:
    """Credential service over the in-memory store (low bcrypt cost for speed)."""
    return CredentialService(
        repository=repository,
        email_sender=email_sender,
        token_signer=token_signer,
        reset_url_base="https://app.example.com/reset-password",
        bcrypt_cost=4,
        clock=clock,
    )


@pytest.fixture
def last_reset_token(email_sender: Mock) -> Callable[[], str]:
    """Return a reader for the token embedded in the last reset link sent."""

    def read() -> str:
        body = email_sender.send.call_args[0][2]
        link = next(line for line in body.splitlines() if "/reset-password/" in line)
        return link.rsplit("/", 1)[1]

    return read


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool for integration and adversarial tests.

    Runs migrations once; skips the requesting tests when PostgreSQL
    is not reachable at DATABASE_URL.
    """
    settings = get_settings()
    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=True)
    try:
        pool.wait(timeout=5.0)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the accounts table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.commit()
    yield
