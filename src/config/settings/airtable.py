"""Settings específicas do Airtable.

Configurações da API REST do Airtable (destino dos registros).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import quote

AIRTABLE_API_BASE_URL: str = "https://api.airtable.com/v0"
DEFAULT_TABLE_NAME: str = "Shopify"
DEFAULT_MAX_FIELD_RETRIES: int = 10


@dataclass(frozen=True)
class AirtableSettings:
    """Configurações do destino Airtable.

    Attributes:
        api_key: Token pessoal (Bearer) do Airtable
        base_id: ID da base (appXXXX)
        table_name: Nome ou ID da tabela
        api_base_url: URL base da API REST
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Tentativas extras em erros transitórios (429/5xx)
        max_field_retries: Reenvios removendo campos rejeitados pelo schema
        typecast: Pede ao Airtable para converter valores automaticamente
    """

    api_key: str = ""
    base_id: str = ""
    table_name: str = DEFAULT_TABLE_NAME
    api_base_url: str = AIRTABLE_API_BASE_URL

    request_timeout_seconds: float = 30.0
    max_retries: int = 2
    max_field_retries: int = DEFAULT_MAX_FIELD_RETRIES
    typecast: bool = False

    @property
    def table_endpoint(self) -> str:
        """URL completa da tabela: {api_base_url}/{base_id}/{table_name}.

        Raises:
            ValueError: Se base_id não configurado.
        """
        if not self.base_id:
            raise ValueError("base_id é obrigatório")
        return f"{self.api_base_url.rstrip('/')}/{self.base_id}/{quote(self.table_name, safe='')}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Airtable.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("AIRTABLE_API_KEY não configurado")

        if not self.base_id:
            errors.append("AIRTABLE_BASE_ID não configurado")

        if not self.table_name:
            errors.append("AIRTABLE_TABLE_NAME não pode ser vazio")

        if self.request_timeout_seconds <= 0:
            errors.append("AIRTABLE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("AIRTABLE_MAX_RETRIES deve ser >= 0")

        if self.max_field_retries < 0:
            errors.append("AIRTABLE_MAX_FIELD_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> AirtableSettings:
    """Carrega AirtableSettings a partir de variáveis de ambiente."""
    return AirtableSettings(
        api_key=os.getenv("AIRTABLE_API_KEY", ""),
        base_id=os.getenv("AIRTABLE_BASE_ID", ""),
        table_name=os.getenv("AIRTABLE_TABLE_NAME", DEFAULT_TABLE_NAME),
        api_base_url=os.getenv("AIRTABLE_API_BASE_URL", AIRTABLE_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("AIRTABLE_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("AIRTABLE_MAX_RETRIES", "2")),
        max_field_retries=int(
            os.getenv("AIRTABLE_MAX_FIELD_RETRIES", str(DEFAULT_MAX_FIELD_RETRIES))
        ),
        typecast=os.getenv("AIRTABLE_TYPECAST", "").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_airtable_settings() -> AirtableSettings:
    """Retorna instância cacheada de AirtableSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
