"""Cliente HTTP especializado para a API REST do Airtable.

Estende HttpClient genérico com:
- Autenticação Bearer (token pessoal)
- Corpo {"records": [{"fields": {...}}]} para criação de registros
- Tradução de erros do Airtable (error.type, error.message)
- Logging sem PII (nunca loga valores dos campos)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.airtable.errors import AirtableRejectionError, parse_airtable_error
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from utils.errors import AirtableUnavailableError

if TYPE_CHECKING:
    import httpx

    from config.settings import AirtableSettings

logger: logging.Logger = logging.getLogger(__name__)


class AirtableHttpClient(HttpClient):
    """Cria registros em uma tabela do Airtable."""

    def __init__(
        self,
        *,
        api_key: str,
        table_endpoint: str,
        typecast: bool = False,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self._api_key = api_key
        self._table_endpoint = table_endpoint
        self._typecast = typecast

    async def create_record(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Cria um registro e retorna o objeto criado ({"id", "fields", ...}).

        Raises:
            ValueError: Se api_key estiver vazio
            AirtableRejectionError: Se o Airtable rejeitar o registro
            AirtableUnavailableError: Se a API estiver inacessível
        """
        if not self._api_key or not self._api_key.strip():
            raise ValueError(
                "api_key é obrigatório para gravar no Airtable. "
                "Verifique se AIRTABLE_API_KEY está configurado."
            )

        payload: dict[str, Any] = {"records": [{"fields": fields}]}
        if self._typecast:
            payload["typecast"] = True

        try:
            response = await self.post(
                self._table_endpoint,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self._api_key}",
                },
            )
        except HttpError as exc:
            logger.warning(
                "airtable_unavailable",
                extra={"status_code": exc.status_code, "error": str(exc)},
            )
            raise AirtableUnavailableError(str(exc)) from exc

        return self._process_response(response)

    def _process_response(self, response: httpx.Response) -> dict[str, Any]:
        try:
            response_data = response.json()
        except json.JSONDecodeError as exc:
            logger.error("airtable_invalid_json", extra={"status_code": response.status_code})
            raise AirtableUnavailableError("invalid_response_json") from exc

        if not response.is_success:
            error = parse_airtable_error(
                response_data if isinstance(response_data, dict) else None,
                response.status_code,
            )
            logger.warning(
                "airtable_rejected",
                extra={
                    "status_code": error.status_code,
                    "error_type": error.error_type,
                    "is_field_rejection": error.is_field_rejection,
                },
            )
            raise AirtableRejectionError(error)

        records = response_data.get("records") if isinstance(response_data, dict) else None
        if not records or not isinstance(records[0], dict):
            raise AirtableUnavailableError("empty_response")

        logger.debug("airtable_record_created", extra={"status_code": response.status_code})
        return records[0]


def create_airtable_http_client(
    settings: AirtableSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AirtableHttpClient:
    """Factory para criar cliente Airtable a partir das settings.

    Args:
        settings: AirtableSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx alternativo (testes).
    """
    # Import local para evitar dependência circular
    from config.settings import get_airtable_settings

    airtable = settings or get_airtable_settings()
    config = HttpClientConfig(
        timeout_seconds=airtable.request_timeout_seconds,
        max_retries=airtable.max_retries,
    )
    return AirtableHttpClient(
        api_key=airtable.api_key,
        table_endpoint=airtable.table_endpoint,
        typecast=airtable.typecast,
        config=config,
        transport=transport,
    )
