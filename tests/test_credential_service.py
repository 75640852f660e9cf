import string
import struct
import zlib

import pytest

from usersig import (
    CredentialService,
    ExpiredError,
    IdentityMismatchError,
    Privilege,
    SignatureInvalidError,
)
from usersig.token.envelope import base64_url_decode, base64_url_encode, pack_envelope, unpack_envelope

SDKAPPID = 1400000000
KEY = "5bd2850fff3ecb11d7c805251c51ee463a25727bddc2385f3fa8bfee1bb93b5e"


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def make_service(clock=None, **kwargs) -> CredentialService:
    return CredentialService(SDKAPPID, KEY, clock=clock, **kwargs)


def test_user_sig_round_trip() -> None:
    clock = FakeClock(1_700_000_000)
    service = make_service(clock)
    token = service.gen_user_sig("alice", 86400)

    result = service.verify_sig(token, "alice")
    assert result.valid is True
    assert result.reason == "ok"
    assert result.issued_at == 1_700_000_000
    assert result.expire == 86400
    assert result.expires_at == 1_700_086_400
    assert result.userbuf is None
    assert result.error is None


def test_default_expire_is_180_days() -> None:
    service = make_service(FakeClock(1000))
    result = service.verify(service.gen_user_sig("alice"), "alice")
    assert result.expire == 86400 * 180


def test_round_trip_with_real_clock() -> None:
    service = make_service()
    token = service.gen_user_sig("alice", 60)
    result = service.verify(token, "alice")
    assert result.valid is True
    assert result.expire == 60


def test_wire_token_uses_only_url_safe_alphabet() -> None:
    token = make_service(FakeClock(1)).gen_private_map_key("alice", 300, 1234, 255)
    assert not set(token) & set("+/=")


def test_user_sig_has_no_userbuf_field() -> None:
    token = make_service(FakeClock(1)).gen_user_sig("alice", 60)
    assert "TLS.userbuf" not in unpack_envelope(token)


def test_private_map_key_returns_userbuf() -> None:
    clock = FakeClock(1_700_000_000)
    service = make_service(clock)
    token = service.gen_private_map_key("alice", 300, 1234, 42)

    result = service.verify_sig_with_user_buf(token, "alice")
    assert result.valid is True
    assert result.userbuf is not None
    assert result.userbuf[0] == 0
    # version, u16 length, b"alice", then five u32 fields
    sdkappid, room_id, expiry, privilege_map, _ = struct.unpack_from(">IIIII", result.userbuf, 8)
    assert sdkappid == SDKAPPID
    assert room_id == 1234
    assert expiry == 1_700_000_300
    assert Privilege(privilege_map) == Privilege.ENTER_ROOM | Privilege.RECEIVE_AUDIO | Privilege.RECEIVE_VIDEO


def test_verify_sig_drops_userbuf() -> None:
    service = make_service(FakeClock(10))
    token = service.gen_private_map_key("alice", 300, 1234, 255)
    result = service.verify_sig(token, "alice")
    assert result.valid is True
    assert result.userbuf is None


def test_string_room_private_map_key() -> None:
    service = make_service(FakeClock(10))
    token = service.gen_private_map_key_with_string_room_id("alice", 300, "lobby", 255)
    result = service.verify_sig_with_user_buf(token, "alice")
    assert result.valid is True
    assert result.userbuf[0] == 1
    assert result.userbuf.endswith(b"\x00\x05lobby")


def test_expiry_boundary() -> None:
    clock = FakeClock(1_700_000_000)
    service = make_service(clock)
    token = service.gen_user_sig("alice", 1)

    clock.now += 1
    assert service.verify(token, "alice").valid is True

    clock.now += 1
    result = service.verify(token, "alice")
    assert result.valid is False
    assert result.reason == "expired"
    assert isinstance(result.error, ExpiredError)
    assert result.issued_at == 1_700_000_000
    assert result.expire == 1


def test_identifier_binding() -> None:
    service = make_service(FakeClock(10))
    token = service.gen_user_sig("alice", 60)
    result = service.verify(token, "bob")
    assert result.valid is False
    assert result.reason == "identifier_mismatch"
    with pytest.raises(IdentityMismatchError):
        result.raise_for_error()


def test_application_mismatch() -> None:
    token = make_service(FakeClock(10)).gen_user_sig("alice", 60)
    other = CredentialService(SDKAPPID + 1, KEY, clock=FakeClock(10))
    result = other.verify(token, "alice")
    assert result.valid is False
    assert result.reason == "sdkappid_mismatch"


def test_wrong_secret_fails_signature() -> None:
    token = make_service(FakeClock(10)).gen_user_sig("alice", 60)
    other = CredentialService(SDKAPPID, "another-key", clock=FakeClock(10))
    result = other.verify(token, "alice")
    assert result.valid is False
    assert result.reason == "signature_invalid"
    assert isinstance(result.error, SignatureInvalidError)
    assert result.issued_at == 10


def test_missing_sig_field() -> None:
    service = make_service(FakeClock(10))
    doc = unpack_envelope(service.gen_user_sig("alice", 60))
    doc["TLS.sig"] = ""
    result = service.verify(pack_envelope(doc), "alice")
    assert result.reason == "sig_missing"


def test_tampered_expire_field_fails_signature() -> None:
    service = make_service(FakeClock(10))
    doc = unpack_envelope(service.gen_user_sig("alice", 60))
    doc["TLS.expire"] = 999999
    result = service.verify(pack_envelope(doc), "alice")
    assert result.reason == "signature_invalid"


def test_tampered_userbuf_fails_signature() -> None:
    service = make_service(FakeClock(10))
    doc = unpack_envelope(service.gen_private_map_key("alice", 60, 1, 2))
    del doc["TLS.userbuf"]
    result = service.verify(pack_envelope(doc), "alice")
    assert result.reason == "signature_invalid"


def test_every_single_character_flip_is_rejected() -> None:
    service = make_service(FakeClock(10))
    token = service.gen_private_map_key("alice", 60, 1, 255)
    original = unpack_envelope(token)
    alphabet = string.ascii_letters + string.digits + "*-_"

    for position, current in enumerate(token):
        for symbol in alphabet:
            if symbol == current:
                continue
            tampered = token[:position] + symbol + token[position + 1 :]
            result = service.verify(tampered, "alice")
            if result.valid:
                # only bits that carry no payload (base64 tail, deflate slack)
                assert unpack_envelope(tampered) == original
            else:
                assert result.reason in {"signature_invalid", "malformed_token"}


def test_deeply_nested_payload_is_malformed() -> None:
    service = make_service(FakeClock(10))
    token = base64_url_encode(zlib.compress(b"[" * 100000 + b"]" * 100000))
    result = service.verify(token, "alice")
    assert result.valid is False
    assert result.reason == "malformed_token"


def test_integer_userid_matches_permission_block_account() -> None:
    service = make_service(FakeClock(10))
    token = service.gen_private_map_key(123, 60, 1, 255)
    result = service.verify_sig_with_user_buf(token, "123")
    assert result.valid is True
    assert result.userbuf[1:3] == b"\x00\x03"
    assert result.userbuf[3:6] == b"123"


def test_malformed_tokens() -> None:
    service = make_service(FakeClock(10))
    assert service.verify("%%%", "alice").reason == "malformed_token"
    assert service.verify(base64_url_encode(b"junk"), "alice").reason == "malformed_token"
    assert service.verify(base64_url_encode(zlib.compress(b'"str"')), "alice").reason == "malformed_token"


def test_non_integer_time_is_malformed() -> None:
    service = make_service(FakeClock(10))
    doc = unpack_envelope(service.gen_user_sig("alice", 60))
    doc["TLS.time"] = "soon"
    assert service.verify(pack_envelope(doc), "alice").reason == "malformed_token"


def test_expired_reported_before_bad_signature_by_default() -> None:
    token = make_service(FakeClock(10)).gen_user_sig("alice", 1)
    verifier = CredentialService(SDKAPPID, "another-key", clock=FakeClock(100))
    assert verifier.verify(token, "alice").reason == "expired"


def test_signature_first_ordering() -> None:
    token = make_service(FakeClock(10)).gen_user_sig("alice", 1)
    verifier = CredentialService(SDKAPPID, "another-key", clock=FakeClock(100), verify_signature_first=True)
    assert verifier.verify(token, "alice").reason == "signature_invalid"

    genuine = make_service(FakeClock(100), verify_signature_first=True)
    assert genuine.verify(token, "alice").reason == "expired"


def test_token_decodes_to_expected_envelope() -> None:
    service = make_service(FakeClock(1234))
    doc = unpack_envelope(service.gen_user_sig("alice", 60))
    assert doc["TLS.ver"] == "2.0"
    assert doc["TLS.identifier"] == "alice"
    assert doc["TLS.sdkappid"] == SDKAPPID
    assert doc["TLS.expire"] == 60
    assert doc["TLS.time"] == 1234
    assert base64_url_decode(service.gen_user_sig("alice", 60))[:1] == b"\x78"


def test_signing_context_hides_key() -> None:
    service = make_service()
    assert KEY not in repr(service.context)
    assert service.context.key == KEY.encode()


def test_invalid_sdkappid_rejected() -> None:
    with pytest.raises(ValueError):
        CredentialService(-1, KEY)
