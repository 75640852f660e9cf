"""Environment-driven configuration for the credential service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_EXPIRE = 86400 * 180

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CredentialConfig:
    """Signing settings for one application."""

    sdkappid: int
    key: str = field(repr=False)
    default_expire: int = DEFAULT_EXPIRE
    verify_signature_first: bool = False

    @classmethod
    def from_env(cls, prefix: str = "USERSIG_") -> "CredentialConfig":
        """Read ``<prefix>SDKAPPID``, ``<prefix>SECRET_KEY`` and optional overrides."""
        raw_appid = os.getenv(f"{prefix}SDKAPPID")
        if not raw_appid:
            raise ValueError(f"{prefix}SDKAPPID must be set.")
        try:
            sdkappid = int(raw_appid)
        except ValueError as exc:
            raise ValueError(f"{prefix}SDKAPPID must be an integer, got {raw_appid!r}.") from exc

        key = os.getenv(f"{prefix}SECRET_KEY")
        if key is None:
            raise ValueError(f"{prefix}SECRET_KEY must be set.")

        raw_expire = os.getenv(f"{prefix}DEFAULT_EXPIRE")
        default_expire = int(raw_expire) if raw_expire else DEFAULT_EXPIRE
        signature_first = os.getenv(f"{prefix}VERIFY_SIGNATURE_FIRST", "").strip().lower() in _TRUE_VALUES
        return cls(
            sdkappid=sdkappid,
            key=key,
            default_expire=default_expire,
            verify_signature_first=signature_first,
        )


def audit_dsn_from_env() -> Optional[str]:
    """Return the Postgres DSN for the audit exporter, if configured."""
    return os.getenv("USERSIG_AUDIT_PG_DSN") or os.getenv("DATABASE_URL")
