"""API: camada de borda.

Responsabilidades:
- Receber webhooks da Shopify e validar assinaturas
- Falar com a API REST do Airtable
- Expor endpoints HTTP (webhooks, health)

Subpastas:
- connectors/: adapters HTTP por sistema externo
- routes/: endpoints HTTP

NÃO PODE conter: regras de mapeamento ou orquestração de use cases.
"""
