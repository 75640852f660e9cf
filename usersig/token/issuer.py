"""HMAC-signed UserSig issuer."""

from __future__ import annotations

import logging
from typing import Optional

from ..privilege.userbuf import encode_userbuf_b64
from ..utils.time import Clock, unix_now
from .envelope import build_envelope, pack_envelope
from .signing import build_signing_string, hmac_sha256
from .types import IssuedToken, SigningContext

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Issue compressed, signed tokens for one application."""

    def __init__(self, context: SigningContext, *, clock: Optional[Clock] = None) -> None:
        self.context = context
        self._clock = clock or unix_now

    def issue(self, identifier: str, expire: int, userbuf: Optional[bytes] = None) -> IssuedToken:
        identifier = str(identifier)
        expire = int(expire)
        issued_at = self._clock()

        userbuf_enabled = userbuf is not None
        b64_userbuf = encode_userbuf_b64(userbuf) if userbuf is not None else ""

        content = build_signing_string(
            identifier,
            self.context.sdkappid,
            issued_at,
            expire,
            b64_userbuf,
            userbuf_enabled,
        )
        sig = hmac_sha256(self.context.key, content)
        envelope = build_envelope(
            identifier=identifier,
            sdkappid=self.context.sdkappid,
            expire=expire,
            issued_at=issued_at,
            sig=sig,
            b64_userbuf=b64_userbuf if userbuf_enabled else None,
        )
        token = pack_envelope(envelope)
        logger.debug(
            "issued token identifier=%s sdkappid=%s expire=%s userbuf=%s",
            identifier,
            self.context.sdkappid,
            expire,
            userbuf_enabled,
        )
        return IssuedToken(
            token=token,
            identifier=identifier,
            issued_at=issued_at,
            expire=expire,
            userbuf=userbuf,
        )
