"""App: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso
- services/: mapeamento de pedidos e gravação adaptativa
- domain/: modelos do pedido e regras de mapeamento
- infra/: implementações concretas de IO (cliente HTTP)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas
- constants/: colunas do Airtable

Padrão: app executa; api adapta; utils apoia.
"""
