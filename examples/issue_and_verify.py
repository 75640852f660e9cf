"""Issue a UserSig and a PrivateMapKey, then verify both.

Run with USERSIG_SDKAPPID and USERSIG_SECRET_KEY set.
"""

from __future__ import annotations

import logging

from usersig import CredentialService, Privilege


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    service = CredentialService.from_env()

    user_sig = service.gen_user_sig("alice", 86400)
    print("UserSig:", user_sig)
    print("verify:", service.verify_sig(user_sig, "alice"))

    privileges = Privilege.ENTER_ROOM | Privilege.RECEIVE_AUDIO | Privilege.RECEIVE_VIDEO
    map_key = service.gen_private_map_key_with_string_room_id("alice", 300, "lobby", privileges)
    result = service.verify_sig_with_user_buf(map_key, "alice")
    print("PrivateMapKey:", map_key)
    print("verify:", result.valid, result.reason, result.userbuf.hex() if result.userbuf else None)


if __name__ == "__main__":
    main()
