"""Exceções de domínio compartilhadas."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class AirtableUnavailableError(InfrastructureError):
    """Falha de conexão/timeout ou erro 5xx persistente ao acessar o Airtable."""


class RecordPersistError(RuntimeError):
    """Registro não pôde ser gravado no Airtable.

    Attributes:
        reason: Código curto do motivo (ex: "retries_exhausted")
        removed_fields: Colunas já descartadas antes da falha
        attempts: Quantidade de envios realizados
    """

    def __init__(
        self,
        reason: str,
        *,
        removed_fields: tuple[str, ...] = (),
        attempts: int = 0,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.removed_fields = removed_fields
        self.attempts = attempts
