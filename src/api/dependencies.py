"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
Adapters are built once during app lifespan and stored in app.state.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.adapters.tokens.jwt_signer import JoseTokenSigner
from src.config.settings import Settings, get_settings
from src.domain.credentials import CredentialService
from src.domain.exceptions import AuthError
from src.domain.ports import EmailSender, TokenSigner


def build_email_sender(settings: Settings) -> EmailSender:
    """SMTP sender when a host is configured, console sender otherwise."""
    if settings.smtp_host:
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            sender=settings.smtp_sender,
        )
    return ConsoleEmailSender()


def build_token_signer(settings: Settings) -> TokenSigner:
    return JoseTokenSigner(settings.jwt_secret)


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


def get_credential_service(request: Request) -> CredentialService:
    """
    Create credential service with injected dependencies.

    Wires together the repository, email sender and token signer.
    """
    settings = get_settings()
    return CredentialService(
        repository=get_repository(request),
        email_sender=request.app.state.email_sender,
        token_signer=request.app.state.token_signer,
        reset_url_base=settings.reset_url_base,
        session_ttl_seconds=settings.session_ttl_seconds,
        reset_token_ttl_seconds=settings.reset_token_ttl_seconds,
        bcrypt_cost=settings.bcrypt_cost,
    )


# Bearer scheme for OpenAPI documentation; missing headers are handled as AuthError
http_bearer = HTTPBearer(auto_error=False)


def get_session_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str:
    """Extract the bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing session token")
    return credentials.credentials
