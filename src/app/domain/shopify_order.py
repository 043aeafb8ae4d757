"""Pedido Shopify (payload do webhook orders/create).

Modelos permissivos: o payload não pertence a este serviço, então todo
campo é opcional e chaves desconhecidas são ignoradas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LENIENT = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class ShopifyAddress(BaseModel):
    """Endereço de entrega ou cobrança."""

    model_config = _LENIENT

    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    province: str | None = None
    province_code: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None

    @property
    def has_street(self) -> bool:
        return bool((self.address1 or "").strip())


class ShopifyCustomer(BaseModel):
    """Cliente associado ao pedido."""

    model_config = _LENIENT

    # Não mapeado; integrações podem enviar o GID ("gid://shopify/Customer/7")
    id: int | str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    note: str | None = None
    default_address: ShopifyAddress | None = None


class ShopifyLineItem(BaseModel):
    """Item do pedido."""

    model_config = _LENIENT

    id: int | str | None = None
    title: str | None = None
    name: str | None = None
    variant_title: str | None = None
    sku: str | None = None
    quantity: int | None = None

    @property
    def display_name(self) -> str:
        """Nome exibido ("Produto - Variante" quando disponível)."""
        return (self.name or self.title or "").strip()


class NoteAttribute(BaseModel):
    """Atributo adicional do checkout (name/value)."""

    model_config = _LENIENT

    name: str | None = None
    value: Any = None


class ShopifyOrder(BaseModel):
    """Pedido recebido no webhook."""

    model_config = _LENIENT

    id: int | str | None = None
    order_number: int | None = None
    name: str | None = None
    email: str | None = None
    contact_email: str | None = None
    phone: str | None = None
    created_at: str | None = None
    financial_status: str | None = None
    tags: str | None = None
    note: str | None = None
    note_attributes: list[NoteAttribute] = Field(default_factory=list)
    customer: ShopifyCustomer | None = None
    shipping_address: ShopifyAddress | None = None
    billing_address: ShopifyAddress | None = None
    line_items: list[ShopifyLineItem] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _join_tag_list(cls, value: Any) -> Any:
        # Algumas integrações enviam tags como lista
        if isinstance(value, list):
            return ", ".join(str(tag) for tag in value if tag)
        return value

    @field_validator("note_attributes", "line_items", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value
