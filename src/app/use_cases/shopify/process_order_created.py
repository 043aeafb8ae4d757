"""Use case: pedido criado na Shopify → registro(s) no Airtable."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.shopify_order import ShopifyOrder
from app.observability import get_correlation_id, record_latency, record_sync_outcome
from utils.errors import RecordPersistError

if TYPE_CHECKING:
    from app.services.order_mapper import OrderMapper
    from app.services.record_persister import AdaptiveRecordPersister, PersistResult

logger = logging.getLogger(__name__)


class InvalidOrderPayloadError(ValueError):
    """Payload não tem o formato de um pedido."""


@dataclass(frozen=True)
class OrderSyncSummary:
    """Resumo da sincronização de um pedido."""

    order_id: int | str | None
    order_number: int | None
    results: list[PersistResult] = field(default_factory=list)

    @property
    def record_ids(self) -> list[str]:
        return [result.record_id for result in self.results]

    @property
    def removed_fields(self) -> list[str]:
        """Colunas descartadas (sem repetição, na ordem de remoção)."""
        seen: dict[str, None] = {}
        for result in self.results:
            for name in result.removed_fields:
                seen.setdefault(str(name), None)
        return list(seen)

    @property
    def partial(self) -> bool:
        return any(result.partial for result in self.results)

    @property
    def status_message(self) -> str:
        if not self.partial:
            return "saved"
        return f"saved_without_fields: {', '.join(self.removed_fields)}"


class ProcessOrderCreatedUseCase:
    """Orquestra validação do payload, mapeamento e gravação adaptativa."""

    def __init__(
        self,
        mapper: OrderMapper,
        persister: AdaptiveRecordPersister,
    ) -> None:
        self._mapper = mapper
        self._persister = persister

    async def execute(self, payload: dict[str, Any]) -> OrderSyncSummary:
        """Processa um webhook orders/create já autenticado.

        Registros são gravados em sequência; a primeira falha interrompe
        o processamento (registros já criados permanecem no destino).

        Raises:
            InvalidOrderPayloadError: Se o payload não for um pedido válido
            RecordPersistError: Se algum registro não puder ser gravado
        """
        started_at = time.perf_counter()
        try:
            order = ShopifyOrder.model_validate(payload)
        except ValidationError as exc:
            logger.warning(
                "order_payload_invalid",
                extra={"error_count": exc.error_count()},
            )
            raise InvalidOrderPayloadError("invalid_order_payload") from exc

        records = self._mapper.map_order_records(order)
        logger.info(
            "order_mapped",
            extra={
                "order_id": order.id,
                "order_number": order.order_number,
                "records": len(records),
                "line_items": len(order.line_items),
            },
        )

        results: list[PersistResult] = []
        try:
            for record in records:
                results.append(await self._persister.persist(record))
        except RecordPersistError as exc:
            logger.error(
                "order_sync_failed",
                extra={
                    "order_id": order.id,
                    "reason": exc.reason,
                    "records_created": len(results),
                    "removed_fields": [str(name) for name in exc.removed_fields],
                },
            )
            record_sync_outcome("failed", len(results), correlation_id=get_correlation_id())
            raise

        summary = OrderSyncSummary(
            order_id=order.id,
            order_number=order.order_number,
            results=results,
        )
        record_sync_outcome(
            "saved_partial" if summary.partial else "saved",
            len(results),
            len(summary.removed_fields),
            get_correlation_id(),
        )
        record_latency(
            "process_order_created",
            "execute",
            (time.perf_counter() - started_at) * 1000,
            get_correlation_id(),
        )
        return summary
