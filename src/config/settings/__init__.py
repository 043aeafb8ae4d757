"""Agregador de settings do Pedido_Bridge.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Airtable (destino)
from config.settings.airtable import (
    AIRTABLE_API_BASE_URL,
    AirtableSettings,
    get_airtable_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Shopify (origem)
from config.settings.shopify import (
    SHOPIFY_HMAC_HEADER,
    ShopifySettings,
    get_shopify_settings,
)

__all__ = [
    # Constants
    "AIRTABLE_API_BASE_URL",
    "SHOPIFY_HMAC_HEADER",
    # Settings
    "AirtableSettings",
    "BaseSettings",
    "Environment",
    "ShopifySettings",
    "get_airtable_settings",
    "get_base_settings",
    "get_shopify_settings",
]
