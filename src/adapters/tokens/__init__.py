"""Session token adapters."""

from .jwt_signer import JoseTokenSigner

__all__ = ["JoseTokenSigner"]
