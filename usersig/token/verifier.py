"""UserSig verification."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..errors import (
    ApplicationMismatchError,
    ExpiredError,
    IdentityMismatchError,
    MalformedTokenError,
    SignatureInvalidError,
    SignatureMissingError,
    UserSigError,
)
from ..privilege.userbuf import decode_userbuf
from ..utils.time import Clock, unix_now
from .envelope import (
    FIELD_EXPIRE,
    FIELD_IDENTIFIER,
    FIELD_SDKAPPID,
    FIELD_SIG,
    FIELD_TIME,
    FIELD_USERBUF,
    unpack_envelope,
)
from .signing import build_signing_string, hmac_sha256, signatures_match
from .types import SigningContext, VerificationResult

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


class TokenVerifier:
    """Verify tokens issued for one application.

    By default the expiry check runs before the signature is recomputed, which
    matches existing verifiers. With ``verify_signature_first`` the signature
    is checked first so that an unauthenticated token never reports
    ``expired``.
    """

    def __init__(
        self,
        context: SigningContext,
        *,
        clock: Optional[Clock] = None,
        verify_signature_first: bool = False,
    ) -> None:
        self.context = context
        self._clock = clock or unix_now
        self.verify_signature_first = verify_signature_first

    def verify(self, token: str, identifier: str) -> VerificationResult:
        identifier = str(identifier)
        parsed: Dict[str, Any] = {}
        try:
            self._verify(token, identifier, parsed)
        except UserSigError as exc:
            logger.info("token rejected identifier=%s reason=%s: %s", identifier, exc.reason, exc)
            return VerificationResult(
                valid=False,
                reason=exc.reason,
                message=str(exc),
                identifier=identifier,
                issued_at=parsed.get("issued_at"),
                expire=parsed.get("expire"),
                userbuf=parsed.get("userbuf"),
                error=exc,
            )
        return VerificationResult(
            valid=True,
            reason="ok",
            identifier=identifier,
            issued_at=parsed["issued_at"],
            expire=parsed["expire"],
            userbuf=parsed.get("userbuf"),
        )

    def _verify(self, token: str, identifier: str, parsed: Dict[str, Any]) -> None:
        if not isinstance(token, str):
            raise MalformedTokenError("token must be a string")
        doc = unpack_envelope(token)

        if doc.get(FIELD_IDENTIFIER) != identifier:
            raise IdentityMismatchError("identifier doesn't match")
        sdkappid = _as_int(doc.get(FIELD_SDKAPPID))
        if sdkappid != self.context.sdkappid:
            raise ApplicationMismatchError("sdkappid doesn't match")
        sig = doc.get(FIELD_SIG)
        if not sig:
            raise SignatureMissingError("sig field is missing")

        issued_at = _as_int(doc.get(FIELD_TIME))
        expire = _as_int(doc.get(FIELD_EXPIRE))
        if issued_at is None or expire is None:
            raise MalformedTokenError("time or expire field is missing or not an integer")
        parsed["issued_at"] = issued_at
        parsed["expire"] = expire

        if self.verify_signature_first:
            self._check_signature(doc, identifier, sdkappid, str(sig), parsed)
            self._check_expiry(issued_at, expire)
        else:
            self._check_expiry(issued_at, expire)
            self._check_signature(doc, identifier, sdkappid, str(sig), parsed)

    def _check_expiry(self, issued_at: int, expire: int) -> None:
        if self._clock() > issued_at + expire:
            raise ExpiredError("sig expired")

    def _check_signature(
        self,
        doc: Dict[str, Any],
        identifier: str,
        sdkappid: int,
        sig: str,
        parsed: Dict[str, Any],
    ) -> None:
        userbuf_enabled = FIELD_USERBUF in doc
        b64_userbuf = ""
        if userbuf_enabled:
            b64_userbuf = doc[FIELD_USERBUF]
            if not isinstance(b64_userbuf, str):
                raise MalformedTokenError("userbuf field is not a string")
            parsed["userbuf"] = decode_userbuf(b64_userbuf)

        content = build_signing_string(
            identifier,
            sdkappid,
            parsed["issued_at"],
            parsed["expire"],
            b64_userbuf,
            userbuf_enabled,
        )
        if not signatures_match(hmac_sha256(self.context.key, content), sig):
            raise SignatureInvalidError("verify failed")
