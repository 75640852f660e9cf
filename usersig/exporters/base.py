"""Base exporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from ..audit import AuditRecord


class Exporter(ABC):
    """Abstract base class for verification audit exporters."""

    @abstractmethod
    async def export(self, record: "AuditRecord") -> None:
        """Export one verification record."""

    async def close(self) -> None:
        """Close exporter resources if needed."""


class InMemoryExporter(Exporter):
    """Keep records in a list; used when no database is configured."""

    def __init__(self) -> None:
        self.records: List["AuditRecord"] = []

    async def export(self, record: "AuditRecord") -> None:
        self.records.append(record)
