"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AirtableUnavailableError,
    InfrastructureError,
    RecordPersistError,
)

__all__ = [
    "AirtableUnavailableError",
    "InfrastructureError",
    "RecordPersistError",
]
