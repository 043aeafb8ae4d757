"""Connectors: adapters de borda para sistemas externos.

Estrutura:
- shopify/: webhooks de pedidos (assinatura HMAC, parsing)
- airtable/: criação de registros via API REST
"""

__all__: list[str] = []
