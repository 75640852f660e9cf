"""Credential service facade.

Holds the signing context for one application and exposes the issuance and
verification calls used by an application backend:

- ``gen_user_sig`` issues a plain UserSig.
- ``gen_private_map_key`` and ``gen_private_map_key_with_string_room_id``
  issue a PrivateMapKey, a UserSig that also binds a permission block for one
  room.
- ``verify_sig`` and ``verify_sig_with_user_buf`` check a token against the
  user id the caller expects.
"""

from __future__ import annotations

import dataclasses
from typing import Optional, Union

from .config import DEFAULT_EXPIRE, CredentialConfig
from .privilege.userbuf import encode_userbuf
from .token.issuer import TokenIssuer
from .token.types import SigningContext, VerificationResult
from .token.verifier import TokenVerifier
from .utils.time import Clock, unix_now


class CredentialService:
    """Issue and verify UserSig / PrivateMapKey tokens."""

    def __init__(
        self,
        sdkappid: int,
        key: Union[str, bytes],
        *,
        clock: Optional[Clock] = None,
        default_expire: int = DEFAULT_EXPIRE,
        verify_signature_first: bool = False,
    ) -> None:
        self.context = SigningContext(sdkappid=sdkappid, key=key)
        self.default_expire = default_expire
        self._clock = clock or unix_now
        self._issuer = TokenIssuer(self.context, clock=self._clock)
        self._verifier = TokenVerifier(
            self.context,
            clock=self._clock,
            verify_signature_first=verify_signature_first,
        )

    @classmethod
    def from_config(cls, config: CredentialConfig, *, clock: Optional[Clock] = None) -> "CredentialService":
        return cls(
            config.sdkappid,
            config.key,
            clock=clock,
            default_expire=config.default_expire,
            verify_signature_first=config.verify_signature_first,
        )

    @classmethod
    def from_env(cls, *, clock: Optional[Clock] = None) -> "CredentialService":
        return cls.from_config(CredentialConfig.from_env(), clock=clock)

    @property
    def sdkappid(self) -> int:
        return self.context.sdkappid

    def issue(self, identifier: str, expire: int, userbuf: Optional[bytes] = None) -> str:
        """Return a wire token, binding ``userbuf`` when given."""
        return self._issuer.issue(identifier, expire, userbuf).token

    def verify(self, token: str, identifier: str) -> VerificationResult:
        return self._verifier.verify(token, identifier)

    def gen_user_sig(self, userid: str, expire: Optional[int] = None) -> str:
        """Issue a UserSig valid for ``expire`` seconds (180 days by default)."""
        return self.issue(userid, self.default_expire if expire is None else expire)

    def gen_private_map_key(self, userid: str, expire: int, roomid: int, privilege_map: int) -> str:
        """Issue a PrivateMapKey scoped to a numeric room id."""
        userid = str(userid)
        userbuf = encode_userbuf(userid, self.sdkappid, roomid, expire, privilege_map, 0, "", now=self._clock())
        return self.issue(userid, expire, userbuf)

    def gen_private_map_key_with_string_room_id(
        self,
        userid: str,
        expire: int,
        roomstr: str,
        privilege_map: int,
    ) -> str:
        """Issue a PrivateMapKey scoped to a string room id."""
        userid = str(userid)
        userbuf = encode_userbuf(userid, self.sdkappid, 0, expire, privilege_map, 0, roomstr, now=self._clock())
        return self.issue(userid, expire, userbuf)

    def verify_sig(self, sig: str, identifier: str) -> VerificationResult:
        """Verify a token, discarding any permission block it carries."""
        return dataclasses.replace(self.verify(sig, identifier), userbuf=None)

    def verify_sig_with_user_buf(self, sig: str, identifier: str) -> VerificationResult:
        """Verify a token and return its raw permission block, if any."""
        return self.verify(sig, identifier)
