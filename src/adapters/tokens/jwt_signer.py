"""
JWT session token adapter - Implements TokenSigner protocol.

Tokens are HS256 JWTs signed with the configured secret. Verification
raises AuthError on any failure so routes can answer 401 uniformly.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from src.domain.exceptions import AuthError

_ALGORITHM = "HS256"


class JoseTokenSigner:
    """
    Implements TokenSigner protocol via python-jose.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, secret: str, algorithm: str = _ALGORITHM) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm

    def sign(self, claims: dict[str, Any], expires_in_seconds: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": now,
            "exp": now + timedelta(seconds=expires_in_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode and verify a token, including its expiry.

        Raises:
            AuthError: If the signature, format or expiry check fails
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            raise AuthError("Invalid session token") from e
        if "sub" not in claims:
            raise AuthError("Invalid session token")
        return claims
