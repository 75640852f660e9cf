"""UserSig token issuance and verification."""

from .issuer import TokenIssuer
from .types import IssuedToken, SigningContext, VerificationResult
from .verifier import TokenVerifier

__all__ = ["TokenIssuer", "TokenVerifier", "IssuedToken", "SigningContext", "VerificationResult"]
