"""Contrato do cliente de gravação de registros (destino tabular).

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class RecordRejectedError(Exception):
    """Destino rejeitou o registro (erro de negócio, não transitório).

    Attributes:
        error_type: Tipo do erro informado pelo destino
        message: Mensagem legível, com campo/valor entre aspas
        status_code: Status HTTP, quando houver
        is_field_rejection: True se o erro aponta um campo removível
    """

    def __init__(
        self,
        error_type: str,
        message: str = "",
        *,
        status_code: int | None = None,
        is_field_rejection: bool = False,
    ) -> None:
        super().__init__(f"record rejected: {error_type}")
        self.error_type = error_type
        self.message = message
        self.status_code = status_code
        self.is_field_rejection = is_field_rejection


class RecordClientProtocol(Protocol):
    """Contrato mínimo para criação de registros.

    Implementações levantam RecordRejectedError para rejeições e
    utils.errors.InfrastructureError para falhas de conectividade.
    """

    async def create_record(self, fields: dict[str, Any]) -> dict[str, Any]: ...
