"""Gravação adaptativa de registros no destino tabular.

O schema do Airtable não é consultado: quando o destino rejeita uma
coluna (nome desconhecido, opção de seleção inválida, valor incompatível),
a coluna apontada na mensagem de erro é removida e o registro reenviado,
até `max_retries` reenvios.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.observability import get_correlation_id, record_field_removed, record_latency
from app.protocols.record_client import RecordRejectedError
from utils.errors import InfrastructureError, RecordPersistError

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from app.protocols.record_client import RecordClientProtocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_FIELD_RETRIES = 10

_COMPONENT = "record_persister"

# Aceita "Campo", ""Valor"" (aspas duplicadas do Airtable) e aspas tipográficas
_QUOTED_TOKEN_RE = re.compile(r'["“”]+([^"“”]+)["“”]+')


@dataclass(frozen=True, slots=True)
class PersistResult:
    """Resultado de uma gravação bem-sucedida."""

    record_id: str
    accepted_fields: tuple[str, ...]
    removed_fields: tuple[str, ...] = ()
    attempts: int = 1

    @property
    def partial(self) -> bool:
        """True se o registro foi salvo sem alguma coluna."""
        return bool(self.removed_fields)


def extract_quoted_tokens(message: str) -> list[str]:
    """Trechos entre aspas de uma mensagem de erro, em ordem."""
    return [token.strip() for token in _QUOTED_TOKEN_RE.findall(message or "") if token.strip()]


def resolve_rejected_field(
    message: str,
    fields: Mapping[str, Any],
    choice_fields: Collection[str] = (),
) -> str | None:
    """Descobre qual coluna do registro a mensagem de erro aponta.

    Ordem: trecho entre aspas igual ao nome de uma coluna; trecho igual
    ao valor de uma coluna (opção de seleção inválida), olhando antes as
    colunas de seleção; "field <nome>" sem aspas.
    """
    tokens = extract_quoted_tokens(message)
    by_casefold = {str(name).casefold(): name for name in fields}

    for token in tokens:
        name = by_casefold.get(token.casefold())
        if name is not None:
            return name

    # Colunas de seleção antes das de texto livre (sort estável)
    by_value_order = sorted(fields, key=lambda n: n not in choice_fields)
    for token in tokens:
        for name in by_value_order:
            value = fields[name]
            if value is not None and str(value).strip() == token:
                return name

    lowered = (message or "").casefold()
    for name in sorted(fields, key=lambda n: len(str(n)), reverse=True):
        if f"field {str(name).casefold()}" in lowered:
            return name
    return None


class AdaptiveRecordPersister:
    """Grava registros removendo colunas rejeitadas pelo schema do destino."""

    __slots__ = ("_choice_fields", "_client", "_max_retries")

    def __init__(
        self,
        client: RecordClientProtocol,
        *,
        max_retries: int = DEFAULT_MAX_FIELD_RETRIES,
        choice_fields: Collection[str] = (),
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries deve ser >= 0")
        self._client = client
        self._max_retries = max_retries
        self._choice_fields = frozenset(choice_fields)

    async def persist(self, record: Mapping[str, Any]) -> PersistResult:
        """Cria o registro; retorna id e colunas efetivamente aceitas.

        Raises:
            RecordPersistError: reenvios esgotados, registro vazio, coluna
                não identificável, rejeição não relacionada a coluna ou
                destino indisponível.
        """
        remaining: dict[str, Any] = dict(record)
        removed: list[str] = []
        last_rejection: RecordRejectedError | None = None

        for attempt in range(1, self._max_retries + 2):
            if not remaining:
                raise RecordPersistError(
                    "empty_record", removed_fields=tuple(removed), attempts=attempt - 1
                )

            started_at = time.perf_counter()
            try:
                created = await self._client.create_record(dict(remaining))
            except RecordRejectedError as exc:
                last_rejection = exc
                if exc.is_field_rejection and attempt > self._max_retries:
                    break
                field_name = self._field_to_remove(exc, remaining, removed, attempt)
                del remaining[field_name]
                removed.append(field_name)
                logger.warning(
                    "record_field_removed",
                    extra={
                        "component": _COMPONENT,
                        "field_name": str(field_name),
                        "error_type": exc.error_type,
                        "attempt": attempt,
                        "remaining_fields": len(remaining),
                    },
                )
                record_field_removed(
                    str(field_name), exc.error_type, attempt, get_correlation_id()
                )
                continue
            except InfrastructureError as exc:
                raise RecordPersistError(
                    "upstream_unavailable", removed_fields=tuple(removed), attempts=attempt
                ) from exc
            finally:
                record_latency(
                    _COMPONENT,
                    "create_record",
                    (time.perf_counter() - started_at) * 1000,
                    get_correlation_id(),
                )

            record_id = str(created.get("id") or "")
            logger.info(
                "record_persisted",
                extra={
                    "component": _COMPONENT,
                    "record_id": record_id,
                    "attempts": attempt,
                    "accepted_fields": len(remaining),
                    "removed_fields": [str(name) for name in removed],
                },
            )
            return PersistResult(
                record_id=record_id,
                accepted_fields=tuple(remaining),
                removed_fields=tuple(removed),
                attempts=attempt,
            )

        raise RecordPersistError(
            "retries_exhausted",
            removed_fields=tuple(removed),
            attempts=self._max_retries + 1,
        ) from last_rejection

    def _field_to_remove(
        self,
        exc: RecordRejectedError,
        remaining: dict[str, Any],
        removed: list[str],
        attempt: int,
    ) -> str:
        if not exc.is_field_rejection:
            raise RecordPersistError(
                "upstream_rejected", removed_fields=tuple(removed), attempts=attempt
            ) from exc
        field_name = resolve_rejected_field(exc.message, remaining, self._choice_fields)
        if field_name is None:
            raise RecordPersistError(
                "unresolved_field", removed_fields=tuple(removed), attempts=attempt
            ) from exc
        return field_name
