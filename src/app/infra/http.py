"""Transporte HTTP (httpx) com retry para falhas transitórias.

Só 429/5xx e falhas de conexão/timeout são repetidos aqui. Respostas 4xx
voltam ao conector, que interpreta o corpo do erro.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.ConnectError)


@dataclass(frozen=True)
class HttpClientConfig:
    """Timeout, política de retry e headers fixos de um conector.

    `max_retries` conta reenvios: 2 significa até 3 requests. O atraso
    dobra a cada reenvio a partir de `backoff_base_seconds`, limitado por
    `backoff_max_seconds`.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True

    def backoff_delay(self, retry_index: int) -> float:
        return min(self.backoff_base_seconds * 2**retry_index, self.backoff_max_seconds)


class HttpError(Exception):
    """Falha de transporte sem URL, headers ou corpo (podem conter segredos)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def is_retryable_status(status_code: int) -> bool:
    """429 (rate limit) e 5xx são transitórios."""
    return status_code == 429 or status_code >= 500


class HttpClient:
    """POST JSON com reenvio em falhas transitórias."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Envia o POST e devolve a resposta final, inclusive 4xx.

        Raises:
            HttpError: 429/5xx ou falha de conexão depois do último reenvio.
        """
        config = self._config
        request_headers = {**config.default_headers, **(headers or {})}

        async with httpx.AsyncClient(
            verify=config.verify_ssl,
            transport=self._transport,
            timeout=config.timeout_seconds,
        ) as client:
            retries = 0
            while True:
                try:
                    response = await client.post(url, json=json, headers=request_headers)
                except _TRANSIENT_ERRORS as exc:
                    if retries >= config.max_retries:
                        raise HttpError("http_connection_error", is_retryable=True) from exc
                    failure: dict[str, Any] = {"error_type": type(exc).__name__}
                else:
                    if not is_retryable_status(response.status_code):
                        return response
                    if retries >= config.max_retries:
                        raise HttpError(
                            "http_retryable_status",
                            status_code=response.status_code,
                            is_retryable=True,
                        )
                    failure = {"status_code": response.status_code}

                delay = config.backoff_delay(retries)
                retries += 1
                logger.info(
                    "http_retry_scheduled",
                    extra={**failure, "retry": retries, "delay_seconds": delay},
                )
                await asyncio.sleep(delay)
