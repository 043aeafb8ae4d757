"""Testes do use case ProcessOrderCreatedUseCase."""

from __future__ import annotations

import pytest

from app.services.order_mapper import OrderMapper
from app.services.record_persister import AdaptiveRecordPersister
from app.use_cases.shopify import (
    InvalidOrderPayloadError,
    OrderSyncSummary,
    ProcessOrderCreatedUseCase,
)
from utils.errors import AirtableUnavailableError, RecordPersistError

from fakes.fake_record_client import FakeRecordClient, unknown_field


def _payload(**overrides):
    payload = {
        "id": 5501,
        "order_number": 1001,
        "name": "#1001",
        "financial_status": "paid",
        "created_at": "2024-03-02T09:15:00-03:00",
        "tags": "",
        "customer": {"first_name": "Ana", "last_name": "Lima", "email": "ana@vet.com"},
        "shipping_address": {"address1": "Rua A, 10", "city": "Campinas", "zip": "13000-000"},
        "line_items": [
            {"title": "Hemograma completo", "quantity": 1},
            {"title": "Urinálise tipo I", "quantity": 2},
        ],
    }
    payload.update(overrides)
    return payload


def _use_case(client: FakeRecordClient, *, per_item: bool = False) -> ProcessOrderCreatedUseCase:
    return ProcessOrderCreatedUseCase(
        mapper=OrderMapper(record_per_line_item=per_item),
        persister=AdaptiveRecordPersister(client, max_retries=10),
    )


@pytest.mark.asyncio
async def test_execute_saves_single_record() -> None:
    client = FakeRecordClient(record_id="rec1")

    summary = await _use_case(client).execute(_payload())

    assert isinstance(summary, OrderSyncSummary)
    assert summary.order_id == 5501
    assert summary.order_number == 1001
    assert summary.record_ids == ["rec1"]
    assert summary.partial is False
    assert summary.status_message == "saved"

    sent = client.calls[0]
    assert sent["Nome"] == "Ana"
    assert sent["Status do Pagamento"] == "Pago"
    assert sent["Data do Pedido"] == "2024-03-02"
    assert sent["Número do Pedido"] == 1001
    assert sent["Tipo de Exame"] == "Hemograma Completo"
    assert sent["Produto"] == "Hemograma completo, Urinálise tipo I"


@pytest.mark.asyncio
async def test_execute_reports_removed_fields() -> None:
    client = FakeRecordClient(
        rejected={
            "Tipo de Exame": unknown_field("Tipo de Exame"),
            "Origem": unknown_field("Origem"),
        }
    )

    summary = await _use_case(client).execute(_payload())

    assert summary.partial is True
    assert summary.removed_fields == ["Tipo de Exame", "Origem"]
    assert summary.status_message == "saved_without_fields: Tipo de Exame, Origem"
    assert "Tipo de Exame" not in client.calls[-1]
    assert "Origem" not in client.calls[-1]


@pytest.mark.asyncio
async def test_execute_one_record_per_line_item() -> None:
    client = FakeRecordClient(rejected={"Quantidade": unknown_field("Quantidade")})

    summary = await _use_case(client, per_item=True).execute(_payload())

    assert len(summary.results) == 2
    assert summary.removed_fields == ["Quantidade"]
    products = [call["Produto"] for call in client.calls if "Quantidade" not in call]
    assert products == ["Hemograma completo", "Urinálise tipo I"]
    exam_types = [call["Tipo de Exame"] for call in client.calls if "Quantidade" not in call]
    assert exam_types == ["Hemograma Completo", "Urinálise"]


@pytest.mark.asyncio
async def test_execute_rejects_non_order_payload() -> None:
    client = FakeRecordClient()

    with pytest.raises(InvalidOrderPayloadError):
        await _use_case(client).execute({"line_items": "nao-e-lista"})

    assert client.calls == []


@pytest.mark.asyncio
async def test_execute_propagates_persist_failure() -> None:
    client = FakeRecordClient(errors=[AirtableUnavailableError("http_timeout")])

    with pytest.raises(RecordPersistError) as exc_info:
        await _use_case(client).execute(_payload())

    assert exc_info.value.reason == "upstream_unavailable"


@pytest.mark.asyncio
async def test_execute_stops_at_first_failed_record() -> None:
    client = FakeRecordClient(
        errors=[AirtableUnavailableError("http_timeout")],
    )

    with pytest.raises(RecordPersistError):
        await _use_case(client, per_item=True).execute(_payload())

    assert len(client.calls) == 1


def test_summary_removed_fields_are_deduplicated() -> None:
    from app.services.record_persister import PersistResult

    summary = OrderSyncSummary(
        order_id=1,
        order_number=1,
        results=[
            PersistResult("rec1", ("A",), ("B",), 2),
            PersistResult("rec2", ("A",), ("B",), 2),
        ],
    )

    assert summary.removed_fields == ["B"]
    assert summary.record_ids == ["rec1", "rec2"]


@pytest.mark.asyncio
async def test_execute_accepts_string_ids() -> None:
    client = FakeRecordClient()
    payload = _payload(
        id="gid://shopify/Order/5501",
        customer={"id": "gid://shopify/Customer/7", "first_name": "Ana"},
        line_items=[{"id": "gid://shopify/LineItem/9", "name": "PCR"}],
    )

    summary = await _use_case(client).execute(payload)

    assert summary.order_id == "gid://shopify/Order/5501"
    assert client.calls[0]["Nome"] == "Ana"


@pytest.mark.asyncio
async def test_execute_accepts_null_quantity() -> None:
    client = FakeRecordClient()
    payload = _payload(line_items=[{"name": "PCR", "quantity": None}])

    summary = await _use_case(client, per_item=True).execute(payload)

    assert summary.record_ids == ["recFAKE"]
    assert client.calls[0]["Quantidade"] == 1
    assert client.calls[0]["Tipo de Exame"] == "PCR"
