"""Envelope field mapping and the compressed URL-safe wire encoding."""

from __future__ import annotations

import base64
import binascii
import json
import zlib
from typing import Any, Dict, Optional

from ..errors import EncodingError, MalformedTokenError

VERSION = "2.0"

FIELD_VER = "TLS.ver"
FIELD_IDENTIFIER = "TLS.identifier"
FIELD_SDKAPPID = "TLS.sdkappid"
FIELD_EXPIRE = "TLS.expire"
FIELD_TIME = "TLS.time"
FIELD_USERBUF = "TLS.userbuf"
FIELD_SIG = "TLS.sig"

# '+' -> '*', '/' -> '-', '=' -> '_'
_TO_URL = str.maketrans("+/=", "*-_")
_FROM_URL = str.maketrans("*-_", "+/=")


def base64_url_encode(data: bytes) -> str:
    """Base64-encode ``data`` with the token's URL-safe substitutions."""
    return base64.b64encode(data).decode("ascii").translate(_TO_URL)


def base64_url_decode(text: str) -> bytes:
    """Reverse :func:`base64_url_encode`."""
    try:
        return base64.b64decode(text.translate(_FROM_URL).encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise MalformedTokenError("base64_url_decode error") from exc


def build_envelope(
    *,
    identifier: str,
    sdkappid: int,
    expire: int,
    issued_at: int,
    sig: str,
    b64_userbuf: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble the ordered field mapping serialized into a token."""
    envelope: Dict[str, Any] = {
        FIELD_VER: VERSION,
        FIELD_IDENTIFIER: str(identifier),
        FIELD_SDKAPPID: int(sdkappid),
        FIELD_EXPIRE: int(expire),
        FIELD_TIME: int(issued_at),
    }
    if b64_userbuf is not None:
        envelope[FIELD_USERBUF] = str(b64_userbuf)
    envelope[FIELD_SIG] = sig
    return envelope


def pack_envelope(envelope: Dict[str, Any]) -> str:
    """Serialize, compress and URL-safe encode an envelope mapping."""
    try:
        raw = json.dumps(envelope, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError("json_encode error") from exc
    try:
        compressed = zlib.compress(raw)
    except zlib.error as exc:
        raise EncodingError("zlib compress error") from exc
    return base64_url_encode(compressed)


def unpack_envelope(token: str) -> Dict[str, Any]:
    """Decode a wire token back into its field mapping."""
    compressed = base64_url_decode(token)
    decompressor = zlib.decompressobj()
    try:
        raw = decompressor.decompress(compressed)
    except zlib.error as exc:
        raise MalformedTokenError("zlib decompress error") from exc
    if not decompressor.eof or decompressor.unused_data:
        raise MalformedTokenError("zlib decompress error: truncated stream or trailing bytes")
    try:
        envelope = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedTokenError("json_decode error") from exc
    if not isinstance(envelope, dict):
        raise MalformedTokenError("json_decode error: token payload is not an object")
    return envelope
