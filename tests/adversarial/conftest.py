"""
Shared fixtures for adversarial tests.

Provides a credential service backed by the real PostgreSQL repository.
"""

from unittest.mock import Mock

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.domain.credentials import CredentialService


@pytest.fixture
def repository(pool: ConnectionPool, clean_database: None) -> PostgresAccountRepository:
    """Create repository instance on an empty accounts table."""
    return PostgresAccountRepository(pool)


@pytest.fixture
def pg_service(
    repository: PostgresAccountRepository, email_sender: Mock, token_signer
) -> CredentialService:
    """Credential service over PostgreSQL with the real clock."""
    return CredentialService(
        repository=repository,
        email_sender=email_sender,
        token_signer=token_signer,
        reset_url_base="https://app.example.com/reset-password",
        bcrypt_cost=4,
    )
