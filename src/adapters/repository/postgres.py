"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Atomicity:
----------
1. **create()**: INSERT ... ON CONFLICT (email) DO NOTHING. The UNIQUE
   constraint decides between concurrent registrations for one email;
   exactly one insert returns a row.

2. **set_reset_token()**: Writes token and expiry in a single UPDATE, so
   the pair is never half-set (also guarded by a CHECK constraint).

3. **consume_reset_token()**: A single conditional UPDATE matches on the
   token value and an unexpired timestamp, sets the new hash and clears
   both reset columns. Two concurrent completions with the same token
   cannot both match.

Driver errors are logged and re-raised as InternalError so callers never
see store details.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.account import Account
from src.domain.exceptions import InternalError

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = """
    id::text, name, email, password_hash, blood_group, reset_token, reset_token_expires_at
"""


def _row_to_account(row: tuple | None) -> Account | None:
    if row is None:
        return None
    return Account(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        blood_group=row[4],
        reset_token=row[5],
        reset_token_expires_at=row[6],
    )


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def _cursor(self) -> Iterator[psycopg.Cursor]:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                yield cursor
                conn.commit()
        except psycopg.Error as e:
            logger.error("Account store error: %s", e)
            raise InternalError() from e

    def create(
        self, name: str, email: str, password_hash: str, blood_group: str
    ) -> Account | None:
        """
        Insert a new account.

        Returns:
            The created Account, or None if the email is already taken
        """
        sql = f"""
            INSERT INTO accounts (name, email, password_hash, blood_group)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_ACCOUNT_COLUMNS}
        """

        with self._cursor() as cursor:
            cursor.execute(sql, (name, email, password_hash, blood_group))
            return _row_to_account(cursor.fetchone())

    def find_by_email(self, email: str) -> Account | None:
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s"

        with self._cursor() as cursor:
            cursor.execute(sql, (email,))
            return _row_to_account(cursor.fetchone())

    def find_by_id(self, account_id: str) -> Account | None:
        # Compare as text so a malformed id is a miss, not a cast error
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id::text = %s"

        with self._cursor() as cursor:
            cursor.execute(sql, (account_id,))
            return _row_to_account(cursor.fetchone())

    def set_reset_token(self, account_id: str, token: str, expires_at: datetime) -> None:
        sql = """
            UPDATE accounts
            SET reset_token = %s, reset_token_expires_at = %s
            WHERE id::text = %s
        """

        with self._cursor() as cursor:
            cursor.execute(sql, (token, expires_at, account_id))

    def consume_reset_token(self, token: str, password_hash: str, now: datetime) -> bool:
        """
        Apply a password reset if the token matches and has not expired.

        Returns:
            True if exactly one account was updated
        """
        sql = """
            UPDATE accounts
            SET password_hash = %s,
                reset_token = NULL,
                reset_token_expires_at = NULL
            WHERE reset_token = %s
              AND reset_token_expires_at > %s
            RETURNING id
        """

        with self._cursor() as cursor:
            cursor.execute(sql, (password_hash, token, now))
            return cursor.fetchone() is not None


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
