"""Observabilidade: correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_field_removed
"""

from app.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_field_removed,
    record_latency,
    record_sync_outcome,
)

__all__ = [
    "get_correlation_id",
    "record_field_removed",
    "record_latency",
    "record_sync_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
