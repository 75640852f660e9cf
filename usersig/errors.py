"""Error taxonomy for token issuance and verification."""

from __future__ import annotations


class UserSigError(Exception):
    """Base class for every issuance or verification failure."""

    reason = "error"


class EncodingError(UserSigError):
    """Serialization, packing or compression failed while issuing."""

    reason = "encoding_error"


class MalformedTokenError(UserSigError):
    """The wire string could not be decoded, decompressed or parsed."""

    reason = "malformed_token"


class IdentityMismatchError(UserSigError):
    reason = "identifier_mismatch"


class ApplicationMismatchError(UserSigError):
    reason = "sdkappid_mismatch"


class SignatureMissingError(UserSigError):
    reason = "sig_missing"


class ExpiredError(UserSigError):
    reason = "expired"


class SignatureInvalidError(UserSigError):
    reason = "signature_invalid"


__all__ = [
    "UserSigError",
    "EncodingError",
    "MalformedTokenError",
    "IdentityMismatchError",
    "ApplicationMismatchError",
    "SignatureMissingError",
    "ExpiredError",
    "SignatureInvalidError",
]
