"""Endpoint de webhook de pedidos da Shopify.

Endpoints:
- POST /webhook/orders/create: pedido criado → registro(s) no Airtable

Fluxo (síncrono, por requisição):
1. Valida HMAC (X-Shopify-Hmac-Sha256) sobre o corpo bruto
2. Parseia JSON e mapeia o pedido
3. Grava no Airtable com remoção adaptativa de colunas rejeitadas
4. Responde 200 só depois da gravação

Segurança:
- Assinatura obrigatória; sem secret configurado tudo é rejeitado (401)
- Logs sem PII (sem nome, email, telefone ou endereço)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.shopify.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from app.bootstrap import get_process_order_use_case
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.use_cases.shopify import InvalidOrderPayloadError
from config.settings import get_shopify_settings
from utils.errors import RecordPersistError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error_response(error: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        content={
            "status": "error",
            "error": error,
            "correlation_id": get_correlation_id(),
        },
        status_code=status_code,
    )


@router.post("/create", response_model=None)
async def receive_order_created(request: Request) -> Response | dict[str, Any]:
    """Recebe webhook orders/create, grava no Airtable e responde.

    Returns:
        Resumo da gravação (200) ou Response de erro (400/401/500).
    """
    token = set_correlation_id(
        request.headers.get("x-correlation-id"),
        request.headers.get("x-shopify-webhook-id"),
    )

    try:
        settings = get_shopify_settings()
        raw_body = await request.body()
        headers = dict(request.headers)

        try:
            payload, _signature = parse_webhook_request(
                raw_body=raw_body,
                headers=headers,
                secret=settings.webhook_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"channel": "shopify", "error": str(exc)},
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"channel": "shopify", "error": str(exc)},
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "shopify",
                "topic": request.headers.get("x-shopify-topic"),
                "shop_domain": request.headers.get("x-shopify-shop-domain"),
                "payload_size": len(raw_body),
            },
        )

        try:
            summary = await get_process_order_use_case().execute(payload)
        except InvalidOrderPayloadError as exc:
            logger.warning("webhook_order_invalid", extra={"channel": "shopify", "error": str(exc)})
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except RecordPersistError as exc:
            logger.error(
                "webhook_upstream_failed",
                extra={"channel": "shopify", "reason": exc.reason, "attempts": exc.attempts},
            )
            return _error_response("upstream_error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(
            "webhook_processed",
            extra={
                "channel": "shopify",
                "records": len(summary.record_ids),
                "partial": summary.partial,
            },
        )
        return {
            "status": "saved",
            "message": summary.status_message,
            "record_ids": summary.record_ids,
            "removed_fields": summary.removed_fields,
            "correlation_id": get_correlation_id(),
        }

    except Exception:
        logger.exception("webhook_processing_failed", extra={"channel": "shopify"})
        return _error_response("internal_error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    finally:
        reset_correlation_id(token)
