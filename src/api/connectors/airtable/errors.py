"""Erros e helpers de parsing para a API REST do Airtable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.protocols.record_client import RecordRejectedError

# Rejeições de schema que apontam uma coluna (ou valor) específica
FIELD_REJECTION_TYPES = frozenset(
    {
        "UNKNOWN_FIELD_NAME",
        "INVALID_MULTIPLE_CHOICE_OPTIONS",
        "INVALID_SELECT_OPTION",
        "INVALID_VALUE_FOR_COLUMN",
    }
)


@dataclass(frozen=True)
class AirtableApiError:
    """Erro retornado pela API do Airtable."""

    error_type: str
    error_message: str
    status_code: int

    @property
    def is_field_rejection(self) -> bool:
        """True se o erro aponta coluna/valor que pode ser removido."""
        return self.error_type in FIELD_REJECTION_TYPES


class AirtableRejectionError(RecordRejectedError):
    """Airtable respondeu com erro de negócio (4xx com corpo de erro)."""

    def __init__(self, error: AirtableApiError) -> None:
        super().__init__(
            error.error_type,
            error.error_message,
            status_code=error.status_code,
            is_field_rejection=error.is_field_rejection,
        )
        self.error = error


def parse_airtable_error(
    response_data: dict[str, Any] | None,
    status_code: int,
) -> AirtableApiError:
    """Extrai informações de erro do response do Airtable.

    Formatos conhecidos:
    - {"error": {"type": "UNKNOWN_FIELD_NAME", "message": "Unknown field name: \\"X\\""}}
    - {"error": "NOT_FOUND"}
    """
    error_obj = (response_data or {}).get("error")
    if isinstance(error_obj, dict):
        return AirtableApiError(
            error_type=str(error_obj.get("type") or "UNKNOWN_ERROR"),
            error_message=str(error_obj.get("message") or ""),
            status_code=status_code,
        )
    if isinstance(error_obj, str) and error_obj:
        return AirtableApiError(
            error_type=error_obj,
            error_message="",
            status_code=status_code,
        )
    return AirtableApiError(
        error_type="UNKNOWN_ERROR",
        error_message="",
        status_code=status_code,
    )
