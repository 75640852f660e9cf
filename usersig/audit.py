"""Verification audit records and an exporting verifier wrapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from .exporters.base import Exporter
from .service import CredentialService
from .token.types import VerificationResult
from .utils.time import utc_now_naive


def _new_id() -> str:
    return str(uuid4())


@dataclass
class AuditRecord:
    """One verification attempt, stripped of the token and any secret."""

    sdkappid: int
    identifier: Optional[str]
    valid: bool
    reason: str
    message: str = ""
    issued_at: Optional[int] = None
    expire: Optional[int] = None
    has_userbuf: bool = False
    audit_id: str = field(default_factory=_new_id)
    checked_at: datetime = field(default_factory=utc_now_naive)

    @classmethod
    def from_result(cls, sdkappid: int, result: VerificationResult) -> "AuditRecord":
        return cls(
            sdkappid=sdkappid,
            identifier=result.identifier,
            valid=result.valid,
            reason=result.reason,
            message=result.message,
            issued_at=result.issued_at,
            expire=result.expire,
            has_userbuf=result.userbuf is not None,
        )

    def to_dict(self) -> dict:
        """Serialize the record for exporters."""
        return {
            "audit_id": self.audit_id,
            "sdkappid": self.sdkappid,
            "identifier": self.identifier,
            "valid": self.valid,
            "reason": self.reason,
            "message": self.message,
            "issued_at": self.issued_at,
            "expire": self.expire,
            "has_userbuf": self.has_userbuf,
            "checked_at": self.checked_at,
        }


class AuditingVerifier:
    """Verify tokens through a service and export every outcome."""

    def __init__(self, service: CredentialService, exporter: Exporter) -> None:
        self.service = service
        self.exporter = exporter

    async def verify(self, token: str, identifier: str) -> VerificationResult:
        result = self.service.verify(token, identifier)
        await self.exporter.export(AuditRecord.from_result(self.service.sdkappid, result))
        return result

    async def close(self) -> None:
        await self.exporter.close()
