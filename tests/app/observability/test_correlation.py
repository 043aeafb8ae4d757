"""Testes do correlation_id por contexto."""

from __future__ import annotations

import uuid

from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id


def test_first_non_empty_candidate_wins() -> None:
    token = set_correlation_id(None, "  ", " corr-1 ", "corr-2")
    try:
        assert get_correlation_id() == "corr-1"
    finally:
        reset_correlation_id(token)


def test_generates_uuid_without_candidates() -> None:
    token = set_correlation_id(None, "")
    try:
        assert uuid.UUID(get_correlation_id()).version == 4
    finally:
        reset_correlation_id(token)


def test_long_values_are_truncated() -> None:
    token = set_correlation_id("x" * 500)
    try:
        assert len(get_correlation_id()) == 128
    finally:
        reset_correlation_id(token)


def test_reset_restores_previous_value() -> None:
    outer = set_correlation_id("outer")
    inner = set_correlation_id("inner")

    reset_correlation_id(inner)
    assert get_correlation_id() == "outer"

    reset_correlation_id(outer)
