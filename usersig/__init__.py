"""usersig package.

Issue and verify UserSig credentials for a real-time audio/video service: a
zlib-compressed, HMAC-SHA256 signed JSON envelope, optionally carrying a
binary room permission block.
"""

from .config import CredentialConfig
from .errors import (
    ApplicationMismatchError,
    EncodingError,
    ExpiredError,
    IdentityMismatchError,
    MalformedTokenError,
    SignatureInvalidError,
    SignatureMissingError,
    UserSigError,
)
from .privilege import Privilege, decode_userbuf, encode_userbuf
from .service import CredentialService
from .token import IssuedToken, SigningContext, TokenIssuer, TokenVerifier, VerificationResult

__all__ = [
    "CredentialConfig",
    "CredentialService",
    "SigningContext",
    "TokenIssuer",
    "TokenVerifier",
    "IssuedToken",
    "VerificationResult",
    "Privilege",
    "encode_userbuf",
    "decode_userbuf",
    "UserSigError",
    "EncodingError",
    "MalformedTokenError",
    "IdentityMismatchError",
    "ApplicationMismatchError",
    "SignatureMissingError",
    "ExpiredError",
    "SignatureInvalidError",
]
