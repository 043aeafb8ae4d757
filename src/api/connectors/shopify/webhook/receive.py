"""Parse e validação inicial do webhook de pedidos (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ..signature import SignatureResult, verify_shopify_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> tuple[dict[str, object], SignatureResult]:
    """Valida assinatura e parseia JSON do webhook.

    A assinatura é validada antes de qualquer parsing do corpo.

    Raises:
        InvalidSignatureError: Se assinatura for inválida ou ausente
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature_result = verify_shopify_signature(raw_body, headers, secret)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result
