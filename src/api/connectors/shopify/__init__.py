"""Conector Shopify: adapter de borda para webhooks de pedidos."""

from .signature import SignatureResult, compute_shopify_hmac, verify_shopify_signature

__all__ = [
    "SignatureResult",
    "compute_shopify_hmac",
    "verify_shopify_signature",
]
