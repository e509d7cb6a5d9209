"""
Account entity - The stored credential and profile record.

Reset state is derived from the token fields at read time; expiry is
evaluated lazily and never swept.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ResetState(str, Enum):
    """
    Password-reset state of an account.

    Transitions:
    - NONE -> PENDING (reset requested)
    - PENDING -> NONE (reset completed, token cleared)
    - PENDING -> EXPIRED (expiry elapses, no write happens)
    - EXPIRED -> PENDING (new reset requested, token overwritten)
    """

    NONE = "NONE"
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class Account:
    """A registered user as loaded from the repository."""

    id: str
    name: str
    email: str
    password_hash: str
    blood_group: str
    reset_token: str | None = None
    reset_token_expires_at: datetime | None = None

    def reset_state(self, now: datetime) -> ResetState:
        if self.reset_token is None or self.reset_token_expires_at is None:
            return ResetState.NONE
        if self.reset_token_expires_at > now:
            return ResetState.PENDING
        return ResetState.EXPIRED

    def public_profile(self) -> dict[str, str]:
        """Profile view safe to return to callers (no hash, no token)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "bloodGroup": self.blood_group,
        }
