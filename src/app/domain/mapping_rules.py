"""Regras estáticas de mapeamento pedido → registro Airtable.

Tabelas imutáveis, injetadas no OrderMapper na construção.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from app.constants.airtable_fields import AirtableField

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_PAYMENT_STATUS_LABEL = "Pendente"

PAYMENT_STATUS_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "pending": "Pendente",
        "authorized": "Autorizado",
        "partially_paid": "Parcialmente pago",
        "paid": "Pago",
        "partially_refunded": "Parcialmente reembolsado",
        "refunded": "Reembolsado",
        "voided": "Cancelado",
        "expired": "Expirado",
    }
)


@dataclass(frozen=True, slots=True)
class CategoryRule:
    """Regex (sobre texto sem acentos, minúsculo) → rótulo de categoria."""

    pattern: str
    label: str
    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled", re.compile(self.pattern, re.IGNORECASE))

    def matches(self, normalized_text: str) -> bool:
        return self.compiled.search(normalized_text) is not None


# Mais específicas primeiro: a primeira regra que casar vence
EXAM_TYPE_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(r"hemograma\s+(completo|com\s+plaquetas)", "Hemograma Completo"),
    CategoryRule(r"hemograma", "Hemograma"),
    CategoryRule(r"perfil\s+(bioquimico\s+)?(completo|geriatrico|pre.?operatorio)", "Perfil Completo"),
    CategoryRule(r"perfil\s+(renal|hepatico)", "Perfil Renal/Hepático"),
    CategoryRule(r"bioquimic", "Bioquímico"),
    CategoryRule(r"urinalise|\burina\b|\beas\b", "Urinálise"),
    CategoryRule(r"parasitologico|\bfezes\b", "Parasitológico"),
    CategoryRule(r"\bpcr\b", "PCR"),
    CategoryRule(r"sorologi|\belisa\b|teste\s+rapido|snap", "Sorologia"),
    CategoryRule(r"citologi", "Citologia"),
    CategoryRule(r"histopatologi|biopsia", "Histopatológico"),
    CategoryRule(r"cultura|antibiograma", "Cultura e Antibiograma"),
)

# Colunas do tipo single select: nunca enviar valor vazio
CHOICE_FIELDS: frozenset[str] = frozenset(
    {
        AirtableField.PAYMENT_STATUS,
        AirtableField.EXAM_TYPE,
        AirtableField.SOURCE,
    }
)


@dataclass(frozen=True, slots=True)
class FieldMappingRules:
    """Configuração imutável do mapeamento."""

    payment_status_labels: Mapping[str, str] = field(default_factory=lambda: PAYMENT_STATUS_LABELS)
    default_payment_status: str = DEFAULT_PAYMENT_STATUS_LABEL
    category_rules: tuple[CategoryRule, ...] = EXAM_TYPE_RULES
    choice_fields: frozenset[str] = CHOICE_FIELDS
    source_label: str = "Shopify"


DEFAULT_MAPPING_RULES = FieldMappingRules()
