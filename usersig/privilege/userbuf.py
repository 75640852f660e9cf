"""Binary permission block encoding.

The block is built at issuance time and carried as opaque bytes afterwards;
only a downstream enforcement layer interprets it. Layout (big-endian)::

    u8   version          0 = numeric room id, 1 = string room id
    u16  account length
    ...  account bytes
    u32  sdkappid
    u32  numeric room id
    u32  expiry timestamp (now + validity window)
    u32  privilege bitmap
    u32  account type
    u16  room id length   (version 1 only)
    ...  room id bytes    (version 1 only)
"""

from __future__ import annotations

import base64
import binascii
import struct
from typing import Optional, Union

from ..errors import EncodingError, MalformedTokenError
from ..utils.time import unix_now

_MAX_STR_LEN = 0xFFFF

_HEADER = struct.Struct(">BH")
_BODY = struct.Struct(">IIIII")
_STR_LEN = struct.Struct(">H")

VERSION_NUMERIC_ROOM = 0
VERSION_STRING_ROOM = 1


def _as_bytes(value: Union[str, bytes, int], field_name: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raw = str(value).encode("utf-8")
    if len(raw) > _MAX_STR_LEN:
        raise EncodingError(f"{field_name} is {len(raw)} bytes; at most {_MAX_STR_LEN} fit a length prefix")
    return raw


def encode_userbuf(
    account: Union[str, bytes, int],
    sdkappid: int,
    room_id: int,
    expire: int,
    privilege_map: int,
    account_type: int = 0,
    room_str: Union[str, bytes] = "",
    *,
    now: Optional[int] = None,
) -> bytes:
    """Pack a permission block.

    A non-empty ``room_str`` switches to the string room id format; ``room_id``
    is still written to its slot and callers pass 0 in that case.
    """
    account_raw = _as_bytes(account, "account")
    room_raw = _as_bytes(room_str, "room_str")
    issued = unix_now() if now is None else now
    version = VERSION_STRING_ROOM if room_raw else VERSION_NUMERIC_ROOM

    try:
        buf = _HEADER.pack(version, len(account_raw)) + account_raw
        buf += _BODY.pack(sdkappid, room_id, issued + expire, int(privilege_map), account_type)
    except struct.error as exc:
        raise EncodingError(f"permission block field out of range: {exc}") from exc

    if room_raw:
        buf += _STR_LEN.pack(len(room_raw)) + room_raw
    return buf


def encode_userbuf_b64(userbuf: bytes) -> str:
    """Return the standard base64 form embedded as ``TLS.userbuf``."""
    return base64.b64encode(userbuf).decode("ascii")


def decode_userbuf(b64_userbuf: str) -> bytes:
    """Reverse the base64 embedding and return the raw block bytes."""
    try:
        return base64.b64decode(b64_userbuf.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise MalformedTokenError("userbuf is not valid base64") from exc
