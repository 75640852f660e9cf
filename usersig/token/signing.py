"""Canonical signing string and HMAC-SHA256 signature helpers."""

from __future__ import annotations

import base64
import hmac
from hashlib import sha256


def build_signing_string(
    identifier: str,
    sdkappid: int,
    issued_at: int,
    expire: int,
    b64_userbuf: str = "",
    userbuf_enabled: bool = False,
) -> str:
    """Return the newline-terminated field list covered by the signature.

    Field order is fixed. The ``TLS.userbuf`` line is omitted entirely when no
    permission block is present.
    """
    content = (
        f"TLS.identifier:{identifier}\n"
        f"TLS.sdkappid:{sdkappid}\n"
        f"TLS.time:{issued_at}\n"
        f"TLS.expire:{expire}\n"
    )
    if userbuf_enabled:
        content += f"TLS.userbuf:{b64_userbuf}\n"
    return content


def hmac_sha256(key: bytes, content: str) -> str:
    """Return base64 (standard alphabet) of HMAC-SHA256 over ``content``."""
    digest = hmac.new(key, content.encode("utf-8"), sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def signatures_match(expected: str, actual: str) -> bool:
    """Compare two base64 signatures in constant time."""
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
