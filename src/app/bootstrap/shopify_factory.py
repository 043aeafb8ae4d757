"""Factory de wiring do fluxo Shopify → Airtable (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.mapping_rules import DEFAULT_MAPPING_RULES, FieldMappingRules
from app.services.order_mapper import OrderMapper
from app.services.record_persister import AdaptiveRecordPersister
from app.use_cases.shopify import ProcessOrderCreatedUseCase
from config.settings import get_airtable_settings, get_shopify_settings

if TYPE_CHECKING:
    from app.protocols.record_client import RecordClientProtocol
    from config.settings import AirtableSettings, ShopifySettings


def create_order_mapper(
    settings: ShopifySettings | None = None,
    rules: FieldMappingRules = DEFAULT_MAPPING_RULES,
) -> OrderMapper:
    """Cria mapper com as regras padrão e o modo por item das settings."""
    shopify = settings or get_shopify_settings()
    return OrderMapper(rules, record_per_line_item=shopify.record_per_line_item)


def create_record_persister(
    settings: AirtableSettings | None = None,
    client: RecordClientProtocol | None = None,
    rules: FieldMappingRules = DEFAULT_MAPPING_RULES,
) -> AdaptiveRecordPersister:
    """Cria persister adaptativo apontando para a tabela configurada.

    As colunas de seleção das regras orientam a remoção por valor.

    O cliente concreto (api/connectors/airtable) é importado localmente
    para respeitar boundaries.
    """
    airtable = settings or get_airtable_settings()
    if client is None:
        from api.connectors.airtable import create_airtable_http_client

        client = create_airtable_http_client(airtable)
    return AdaptiveRecordPersister(
        client,
        max_retries=airtable.max_field_retries,
        choice_fields=rules.choice_fields,
    )


def create_process_order_created_use_case(
    *,
    shopify_settings: ShopifySettings | None = None,
    airtable_settings: AirtableSettings | None = None,
    client: RecordClientProtocol | None = None,
) -> ProcessOrderCreatedUseCase:
    """Cria use case de pedidos com dependências injetadas."""
    return ProcessOrderCreatedUseCase(
        mapper=create_order_mapper(shopify_settings),
        persister=create_record_persister(airtable_settings, client),
    )
