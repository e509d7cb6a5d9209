"""
Accounts API package.

Contains the registration, login and password reset routes.
"""

from src.api.accounts.routes import router

__all__ = ["router"]
