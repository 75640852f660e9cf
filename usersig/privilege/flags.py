"""Privilege bitmap flags."""

from __future__ import annotations

from enum import IntFlag


class Privilege(IntFlag):
    """Room feature permissions, one bit per feature (bits 0-7)."""

    NONE = 0
    CREATE_ROOM = 1 << 0
    ENTER_ROOM = 1 << 1
    SEND_AUDIO = 1 << 2
    RECEIVE_AUDIO = 1 << 3
    SEND_VIDEO = 1 << 4
    RECEIVE_VIDEO = 1 << 5
    SEND_SCREEN_SHARE = 1 << 6
    RECEIVE_SCREEN_SHARE = 1 << 7
    ALL = 0xFF
