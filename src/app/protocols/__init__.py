"""Protocolos e contratos do core da aplicação."""

from .record_client import RecordClientProtocol, RecordRejectedError

__all__ = [
    "RecordClientProtocol",
    "RecordRejectedError",
]
