"""Testes da gravação adaptativa (remoção de colunas rejeitadas)."""

from __future__ import annotations

import pytest

from app.domain.mapping_rules import CHOICE_FIELDS
from app.domain.shopify_order import ShopifyOrder
from app.protocols.record_client import RecordRejectedError
from app.services.order_mapper import OrderMapper
from app.services.record_persister import (
    AdaptiveRecordPersister,
    PersistResult,
    extract_quoted_tokens,
    resolve_rejected_field,
)
from utils.errors import AirtableUnavailableError, RecordPersistError

from fakes import fake_record_client as fakes


class TestResolveRejectedField:
    """Identificação da coluna a partir da mensagem de erro."""

    def test_quoted_field_name(self) -> None:
        fields = {"A": 1, "Tipo de Exame": "PCR"}
        assert resolve_rejected_field('Unknown field name: "Tipo de Exame"', fields) == (
            "Tipo de Exame"
        )

    def test_doubled_quotes_value_points_to_field(self) -> None:
        fields = {"Status do Pagamento": "Pago", "Tipo de Exame": "Sorologia"}
        message = 'Insufficient permissions to create new select option ""Sorologia""'

        assert resolve_rejected_field(message, fields) == "Tipo de Exame"

    def test_field_name_preferred_over_value(self) -> None:
        fields = {"Origem": "Estado", "Estado": "SP"}
        assert resolve_rejected_field('Field "Estado" cannot accept the provided value', fields) == (
            "Estado"
        )

    def test_value_match_prefers_choice_columns(self) -> None:
        fields = {"Produto": "PCR", "Tipo de Exame": "PCR"}
        message = 'Insufficient permissions to create new select option ""PCR""'

        assert resolve_rejected_field(message, fields) == "Produto"
        assert resolve_rejected_field(message, fields, {"Tipo de Exame"}) == "Tipo de Exame"

    def test_unquoted_field_suffix(self) -> None:
        fields = {"Data do Pedido": "ontem", "Data": "x"}
        message = 'Cannot parse date value "ontem" for field Data do Pedido'

        assert resolve_rejected_field(message, fields) == "Data do Pedido"

    def test_unresolvable(self) -> None:
        assert resolve_rejected_field("Something went wrong", {"A": 1}) is None

    def test_extract_quoted_tokens(self) -> None:
        assert extract_quoted_tokens('Field "A" cannot accept ""B""') == ["A", "B"]
        assert extract_quoted_tokens("") == []


class TestAdaptiveRecordPersister:
    """Loop de reenvio."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self) -> None:
        client = fakes.FakeRecordClient()
        persister = AdaptiveRecordPersister(client)

        result = await persister.persist({"A": 1, "B": 2})

        assert result == PersistResult(
            record_id="recFAKE",
            accepted_fields=("A", "B"),
            removed_fields=(),
            attempts=1,
        )
        assert result.partial is False

    @pytest.mark.asyncio
    async def test_unknown_field_is_removed_and_resubmitted(self) -> None:
        client = fakes.FakeRecordClient(rejected={"B": fakes.unknown_field("B")})
        persister = AdaptiveRecordPersister(client)

        result = await persister.persist({"A": 1, "B": 2})

        assert client.calls == [{"A": 1, "B": 2}, {"A": 1}]
        assert set(result.accepted_fields) == {"A"}
        assert result.removed_fields == ("B",)
        assert result.attempts == 2
        assert result.partial is True

    @pytest.mark.asyncio
    async def test_invalid_choice_value_removes_its_field(self) -> None:
        client = fakes.FakeRecordClient(
            rejected={"Tipo de Exame": fakes.invalid_choice("Sorologia")}
        )
        persister = AdaptiveRecordPersister(client)

        result = await persister.persist({"Nome": "Ana", "Tipo de Exame": "Sorologia"})

        assert result.accepted_fields == ("Nome",)
        assert result.removed_fields == ("Tipo de Exame",)

    @pytest.mark.asyncio
    async def test_invalid_exam_type_keeps_product_with_same_value(self) -> None:
        order = ShopifyOrder.model_validate({"line_items": [{"name": "PCR"}]})
        record = OrderMapper().map_order(order)
        client = fakes.FakeRecordClient(rejected={"Tipo de Exame": fakes.invalid_choice("PCR")})
        persister = AdaptiveRecordPersister(client, choice_fields=CHOICE_FIELDS)

        result = await persister.persist(record)

        assert result.removed_fields == ("Tipo de Exame",)
        assert "Produto" in result.accepted_fields
        assert result.attempts == 2
        assert client.calls[-1]["Produto"] == "PCR"

    @pytest.mark.asyncio
    async def test_several_fields_removed_one_per_attempt(self) -> None:
        client = fakes.FakeRecordClient(
            rejected={
                "B": fakes.unknown_field("B"),
                "C": fakes.unknown_field("C"),
            }
        )

        result = await AdaptiveRecordPersister(client).persist({"A": 1, "B": 2, "C": 3})

        assert result.removed_fields == ("B", "C")
        assert client.calls[-1] == {"A": 1}
        assert len(client.calls) == 3

    @pytest.mark.asyncio
    async def test_does_not_mutate_input(self) -> None:
        client = fakes.FakeRecordClient(rejected={"B": fakes.unknown_field("B")})
        record = {"A": 1, "B": 2}

        await AdaptiveRecordPersister(client).persist(record)

        assert record == {"A": 1, "B": 2}

    @pytest.mark.asyncio
    async def test_retries_are_bounded(self) -> None:
        fields = {f"F{i}": i for i in range(15)}
        client = fakes.FakeRecordClient(
            rejected={name: fakes.unknown_field(name) for name in fields}
        )
        persister = AdaptiveRecordPersister(client, max_retries=10)

        with pytest.raises(RecordPersistError) as exc_info:
            await persister.persist(fields)

        assert exc_info.value.reason == "retries_exhausted"
        assert len(client.calls) == 11
        assert len(exc_info.value.removed_fields) == 10
        assert exc_info.value.attempts == 11
        assert isinstance(exc_info.value.__cause__, RecordRejectedError)

    @pytest.mark.asyncio
    async def test_zero_retries_fails_on_first_rejection(self) -> None:
        client = fakes.FakeRecordClient(rejected={"B": fakes.unknown_field("B")})

        with pytest.raises(RecordPersistError) as exc_info:
            await AdaptiveRecordPersister(client, max_retries=0).persist({"A": 1, "B": 2})

        assert exc_info.value.reason == "retries_exhausted"
        assert exc_info.value.removed_fields == ()
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_record_that_becomes_empty_fails(self) -> None:
        client = fakes.FakeRecordClient(rejected={"A": fakes.unknown_field("A")})

        with pytest.raises(RecordPersistError) as exc_info:
            await AdaptiveRecordPersister(client).persist({"A": 1})

        assert exc_info.value.reason == "empty_record"
        assert exc_info.value.removed_fields == ("A",)
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_record_is_never_sent(self) -> None:
        client = fakes.FakeRecordClient()

        with pytest.raises(RecordPersistError, match="empty_record"):
            await AdaptiveRecordPersister(client).persist({})

        assert client.calls == []

    @pytest.mark.asyncio
    async def test_non_field_rejection_is_not_retried(self) -> None:
        client = fakes.FakeRecordClient(
            errors=[RecordRejectedError("INVALID_PERMISSIONS", "no access", status_code=403)]
        )

        with pytest.raises(RecordPersistError) as exc_info:
            await AdaptiveRecordPersister(client).persist({"A": 1})

        assert exc_info.value.reason == "upstream_rejected"
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_unresolvable_field_fails(self) -> None:
        client = fakes.FakeRecordClient(
            errors=[
                RecordRejectedError(
                    "UNKNOWN_FIELD_NAME", 'Unknown field name: "Z"', is_field_rejection=True
                )
            ]
        )

        with pytest.raises(RecordPersistError) as exc_info:
            await AdaptiveRecordPersister(client).persist({"A": 1})

        assert exc_info.value.reason == "unresolved_field"

    @pytest.mark.asyncio
    async def test_unavailable_upstream(self) -> None:
        client = fakes.FakeRecordClient(errors=[AirtableUnavailableError("http_connection_error")])

        with pytest.raises(RecordPersistError) as exc_info:
            await AdaptiveRecordPersister(client).persist({"A": 1})

        assert exc_info.value.reason == "upstream_unavailable"
        assert isinstance(exc_info.value.__cause__, AirtableUnavailableError)

    def test_negative_max_retries_rejected(self) -> None:
        with pytest.raises(ValueError):
            AdaptiveRecordPersister(fakes.FakeRecordClient(), max_retries=-1)
