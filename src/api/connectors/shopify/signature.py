"""Validação de assinatura HMAC-SHA256 (base64) dos webhooks da Shopify."""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.settings.shopify import SHOPIFY_HMAC_HEADER

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação de assinatura."""

    valid: bool
    error: str | None = None


def compute_shopify_hmac(raw_body: bytes, secret: str) -> str:
    """Calcula base64(HMAC-SHA256(secret, corpo bruto))."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def verify_shopify_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida o header X-Shopify-Hmac-Sha256 contra o corpo bruto.

    Sem secret configurado a validação falha (fail-closed).

    Args:
        raw_body: Corpo bruto do request (exatamente como recebido)
        headers: Headers recebidos (busca case-insensitive)
        secret: Secret compartilhado do webhook

    Returns:
        SignatureResult com motivo em caso de falha
    """
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    received = _get_header(headers, SHOPIFY_HMAC_HEADER)
    if not received:
        return SignatureResult(valid=False, error="missing_signature")

    expected = compute_shopify_hmac(raw_body, secret)
    # Comparação em tempo constante sobre bytes (header pode ter não-ASCII)
    if not hmac.compare_digest(received.strip().encode("utf-8"), expected.encode("utf-8")):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
