"""Serviços de aplicação (sem IO direto).

Implementações concretas de IO ficam em app/infra/ e api/connectors/.
"""

from app.services.order_mapper import OrderMapper, TargetRecord
from app.services.record_persister import AdaptiveRecordPersister, PersistResult

__all__ = [
    "AdaptiveRecordPersister",
    "OrderMapper",
    "PersistResult",
    "TargetRecord",
]
