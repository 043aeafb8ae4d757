"""Endpoints de health check (liveness/readiness)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_airtable_settings, get_base_settings, get_shopify_settings

logger = logging.getLogger(__name__)

router = APIRouter()

class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    errors: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "errors": list(self.errors)}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness probe: configuração mínima de Shopify e Airtable.

    Não chama o Airtable: uma gravação de teste criaria registros reais.
    """
    shopify_check = _check_settings(get_shopify_settings().validate())
    airtable_check = _check_settings(get_airtable_settings().validate())
    ready = shopify_check.status == "ok" and airtable_check.status == "ok"

    if not ready:
        logger.warning("readiness_not_ready", extra={"component": "health"})

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "shopify": shopify_check.as_dict(),
            "airtable": airtable_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_settings(errors: list[str]) -> DependencyCheck:
    if errors:
        return DependencyCheck(status="failed", errors=tuple(errors))
    return DependencyCheck(status="ok")
