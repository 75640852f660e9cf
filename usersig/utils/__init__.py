"""Utility helpers for clock access."""

from .time import Clock, unix_now, utc_now, utc_now_naive

__all__ = ["Clock", "unix_now", "utc_now", "utc_now_naive"]
