"""Settings específicas da Shopify (webhooks de pedidos)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Header enviado pela Shopify com o HMAC (base64) do corpo bruto
SHOPIFY_HMAC_HEADER: str = "X-Shopify-Hmac-Sha256"


@dataclass(frozen=True)
class ShopifySettings:
    """Configurações do conector Shopify.

    Attributes:
        webhook_secret: Secret compartilhado para validação HMAC
        record_per_line_item: Gera um registro por item do pedido
    """

    webhook_secret: str = ""
    record_per_line_item: bool = False

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Shopify.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []
        if not self.webhook_secret:
            errors.append("SHOPIFY_WEBHOOK_SECRET não configurado")
        return errors


def _load_from_env() -> ShopifySettings:
    """Carrega ShopifySettings a partir de variáveis de ambiente."""
    return ShopifySettings(
        webhook_secret=os.getenv("SHOPIFY_WEBHOOK_SECRET", ""),
        record_per_line_item=os.getenv("SHOPIFY_RECORD_PER_LINE_ITEM", "").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_shopify_settings() -> ShopifySettings:
    """Retorna instância cacheada de ShopifySettings."""
    return _load_from_env()
