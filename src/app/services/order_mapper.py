"""Mapeamento determinístico pedido Shopify → registro Airtable.

Função pura: não faz IO nem loga dados do cliente. Regras (status de
pagamento, tipos de exame, colunas de seleção) vêm de FieldMappingRules.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from typing import TYPE_CHECKING

from app.constants.airtable_fields import AirtableField
from app.domain.mapping_rules import DEFAULT_MAPPING_RULES, FieldMappingRules
from app.domain.shopify_order import ShopifyAddress, ShopifyCustomer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.shopify_order import ShopifyLineItem, ShopifyOrder

TargetRecord = dict[str, str | int]

_ORDER_NAME_DIGITS_RE = re.compile(r"\d+")


def normalize_text(text: str | None) -> str:
    """Minúsculas, sem acentos e com espaços colapsados."""
    lowered = (text or "").strip().lower()
    if not lowered:
        return ""
    no_accents = "".join(
        ch for ch in unicodedata.normalize("NFKD", lowered) if not unicodedata.combining(ch)
    )
    return " ".join(no_accents.split())


def first_non_empty(*values: str | None) -> str:
    """Primeiro valor não vazio (aparado) ou string vazia."""
    for value in values:
        cleaned = (value or "").strip()
        if cleaned:
            return cleaned
    return ""


def select_address(order: ShopifyOrder) -> ShopifyAddress:
    """Endereço de entrega se tiver logradouro; senão o de cobrança."""
    if order.shipping_address is not None and order.shipping_address.has_street:
        return order.shipping_address
    if order.billing_address is not None:
        return order.billing_address
    return ShopifyAddress()


def format_order_date(value: str | None) -> str:
    """Converte timestamp ISO-8601 em data YYYY-MM-DD.

    Usa a data como escrita no timestamp (sem conversão de fuso).
    Vazio → ""; formato não reconhecido → valor original. Nunca levanta.
    """
    text = (value or "").strip()
    if not text:
        return ""
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        return text


def drop_empty_choice_fields(
    record: TargetRecord,
    choice_fields: Iterable[str],
) -> TargetRecord:
    """Remove colunas de seleção com valor vazio (Airtable rejeita "")."""
    choices = set(choice_fields)
    return {
        name: value
        for name, value in record.items()
        if name not in choices or (value is not None and str(value).strip() != "")
    }


def _render_note_attributes(order: ShopifyOrder) -> str:
    parts = []
    for attribute in order.note_attributes:
        name = (attribute.name or "").strip()
        value = "" if attribute.value is None else str(attribute.value).strip()
        if name and value:
            parts.append(f"{name}: {value}")
    return "; ".join(parts)


def _street_line(address: ShopifyAddress) -> str:
    return ", ".join(
        part for part in ((address.address1 or "").strip(), (address.address2 or "").strip()) if part
    )


def _order_number(order: ShopifyOrder) -> int | None:
    if order.order_number is not None:
        return order.order_number
    match = _ORDER_NAME_DIGITS_RE.search(order.name or "")
    return int(match.group(0)) if match else None


class OrderMapper:
    """Transforma ShopifyOrder em um ou mais registros do Airtable."""

    __slots__ = ("_record_per_line_item", "_rules")

    def __init__(
        self,
        rules: FieldMappingRules = DEFAULT_MAPPING_RULES,
        *,
        record_per_line_item: bool = False,
    ) -> None:
        self._rules = rules
        self._record_per_line_item = record_per_line_item

    @property
    def rules(self) -> FieldMappingRules:
        return self._rules

    def translate_payment_status(self, code: str | None) -> str:
        """Traduz financial_status; códigos desconhecidos usam o padrão."""
        key = (code or "").strip().lower()
        return self._rules.payment_status_labels.get(key, self._rules.default_payment_status)

    def classify(self, text: str | None) -> str | None:
        """Rótulo da primeira regra que casar com o texto, ou None."""
        normalized = normalize_text(text)
        if not normalized:
            return None
        for rule in self._rules.category_rules:
            if rule.matches(normalized):
                return rule.label
        return None

    def classify_order(self, order: ShopifyOrder) -> str | None:
        """Classifica pelas tags; sem match, pelos nomes dos itens em ordem."""
        label = self.classify(order.tags)
        if label is not None:
            return label
        for item in order.line_items:
            label = self.classify(item.display_name)
            if label is not None:
                return label
        return None

    def map_order(self, order: ShopifyOrder) -> TargetRecord:
        """Mapeia o pedido inteiro em um único registro."""
        record = self._base_record(order)
        record[AirtableField.PRODUCT] = ", ".join(
            item.display_name for item in order.line_items if item.display_name
        )
        record[AirtableField.EXAM_TYPE] = self.classify_order(order) or ""
        return drop_empty_choice_fields(record, self._rules.choice_fields)

    def map_line_item(
        self,
        order: ShopifyOrder,
        item: ShopifyLineItem,
        *,
        order_label: str | None = None,
    ) -> TargetRecord:
        """Registro de um item, com campos do pedido e rótulo próprio."""
        record = self._base_record(order)
        record[AirtableField.PRODUCT] = item.display_name
        record[AirtableField.QUANTITY] = item.quantity if item.quantity is not None else 1
        record[AirtableField.EXAM_TYPE] = self.classify(item.display_name) or order_label or ""
        return drop_empty_choice_fields(record, self._rules.choice_fields)

    def map_order_records(self, order: ShopifyOrder) -> list[TargetRecord]:
        """Um registro por item (modo por item) ou um registro por pedido."""
        if not self._record_per_line_item or not order.line_items:
            return [self.map_order(order)]
        order_label = self.classify(order.tags)
        return [
            self.map_line_item(order, item, order_label=order_label)
            for item in order.line_items
        ]

    def _base_record(self, order: ShopifyOrder) -> TargetRecord:
        address = select_address(order)
        customer = order.customer or ShopifyCustomer()
        default_address = customer.default_address or ShopifyAddress()
        shipping = order.shipping_address or ShopifyAddress()
        billing = order.billing_address or ShopifyAddress()

        record: TargetRecord = {
            AirtableField.FIRST_NAME: first_non_empty(customer.first_name, address.first_name),
            AirtableField.LAST_NAME: first_non_empty(customer.last_name, address.last_name),
            AirtableField.EMAIL: first_non_empty(
                customer.email, order.email, order.contact_email
            ),
            AirtableField.PHONE: first_non_empty(
                address.phone,
                shipping.phone,
                billing.phone,
                customer.phone,
                default_address.phone,
                order.phone,
            ),
            AirtableField.ADDRESS: _street_line(address),
            AirtableField.ZIP: first_non_empty(address.zip),
            AirtableField.CITY: first_non_empty(address.city),
            AirtableField.STATE: first_non_empty(address.province, address.province_code),
            AirtableField.CRMV: "",
            AirtableField.CLINIC: first_non_empty(
                address.company, shipping.company, billing.company, default_address.company
            ),
            AirtableField.PAYMENT_STATUS: self.translate_payment_status(order.financial_status),
            AirtableField.ORDER_DATE: format_order_date(order.created_at),
            AirtableField.NOTES: first_non_empty(
                order.note, _render_note_attributes(order), customer.note
            ),
            AirtableField.SOURCE: self._rules.source_label,
        }
        order_number = _order_number(order)
        if order_number is not None:
            record[AirtableField.ORDER_NUMBER] = order_number
        return record
