"""correlation_id por requisição, propagado para os logs via ContextVar.

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

MAX_CORRELATION_ID_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(*candidates: str | None) -> Token[str]:
    """Define o correlation_id a partir do primeiro candidato não vazio.

    Valores recebidos de headers são aparados e truncados. Sem candidato
    válido, gera um UUID v4.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = ""
    for candidate in candidates:
        cleaned = (candidate or "").strip()
        if cleaned:
            value = cleaned[:MAX_CORRELATION_ID_LENGTH]
            break
    return _correlation_id.set(value or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)
