"""Token datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..errors import UserSigError

_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class SigningContext:
    """Application id and shared secret used to sign and verify tokens."""

    sdkappid: int
    key: Union[str, bytes] = field(repr=False)

    def __post_init__(self) -> None:
        if not 0 <= int(self.sdkappid) <= _UINT32_MAX:
            raise ValueError(f"sdkappid must fit an unsigned 32-bit integer, got {self.sdkappid}")
        object.__setattr__(self, "sdkappid", int(self.sdkappid))
        if isinstance(self.key, str):
            object.__setattr__(self, "key", self.key.encode("utf-8"))


@dataclass(frozen=True)
class IssuedToken:
    token: str
    identifier: str
    issued_at: int
    expire: int
    userbuf: Optional[bytes] = None


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one verification call.

    ``issued_at`` and ``expire`` are filled in whenever the token got far
    enough to parse them, including for expired or badly signed tokens.
    """

    valid: bool
    reason: str
    message: str = ""
    identifier: Optional[str] = None
    issued_at: Optional[int] = None
    expire: Optional[int] = None
    userbuf: Optional[bytes] = None
    error: Optional[UserSigError] = field(default=None, compare=False)

    @property
    def expires_at(self) -> Optional[int]:
        if self.issued_at is None or self.expire is None:
            return None
        return self.issued_at + self.expire

    def raise_for_error(self) -> None:
        """Re-raise the captured failure, if any."""
        if self.error is not None:
            raise self.error
