"""Audit exporter implementations."""

from ..config import audit_dsn_from_env
from .base import Exporter, InMemoryExporter

__all__ = ["Exporter", "InMemoryExporter", "PostgresExporter", "create_exporter_from_env"]


def __getattr__(name: str):
    if name == "PostgresExporter":
        from .postgres import PostgresExporter

        return PostgresExporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def create_exporter_from_env() -> Exporter:
    """Create a Postgres exporter if a DSN is configured, otherwise in-memory."""
    dsn = audit_dsn_from_env()
    if dsn:
        from .postgres import PostgresExporter

        return PostgresExporter(dsn=dsn)
    return InMemoryExporter()
