"""Colunas da tabela de destino no Airtable."""

from __future__ import annotations

from enum import StrEnum


class AirtableField(StrEnum):
    """Nomes das colunas (exatamente como cadastradas no Airtable)."""

    FIRST_NAME = "Nome"
    LAST_NAME = "Sobrenome"
    EMAIL = "Email"
    PHONE = "Telefone"
    ADDRESS = "Endereço"
    ZIP = "CEP"
    CITY = "Cidade"
    STATE = "Estado"
    CRMV = "CRMV"
    CLINIC = "Nome da Clínica ou Hospital"
    ORDER_NUMBER = "Número do Pedido"
    PAYMENT_STATUS = "Status do Pagamento"
    ORDER_DATE = "Data do Pedido"
    EXAM_TYPE = "Tipo de Exame"
    PRODUCT = "Produto"
    QUANTITY = "Quantidade"
    NOTES = "Observações"
    SOURCE = "Origem"
