"""Registro de métricas via structured logging.

As métricas são linhas de log com `metric_type` e podem ser agregadas
depois (Cloud Logging, BigQuery etc.). Nunca incluem valores de campos,
apenas nomes de colunas e contadores.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "airtable_client")
        operation: Nome da operação (ex: "create_record")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_field_removed(
    field_name: str,
    error_type: str,
    attempt: int,
    correlation_id: str | None = None,
) -> None:
    """Registra coluna removida após rejeição do schema do Airtable."""
    logger.info(
        "metric_field_removed",
        extra={
            "metric_type": "field_removed",
            "field_name": field_name,
            "error_type": error_type,
            "attempt": attempt,
            "correlation_id": correlation_id,
        },
    )


def record_sync_outcome(
    outcome: str,
    records: int,
    removed_fields: int = 0,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado final da sincronização de um pedido.

    Args:
        outcome: "saved", "saved_partial" ou "failed"
        records: Quantidade de registros criados
        removed_fields: Quantidade de colunas descartadas no total
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_sync_outcome",
        extra={
            "metric_type": "sync_outcome",
            "outcome": outcome,
            "records": records,
            "removed_fields": removed_fields,
            "correlation_id": correlation_id,
        },
    )
