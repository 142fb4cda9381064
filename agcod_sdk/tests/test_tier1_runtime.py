"""Tests for tier1_runtime modules."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from agcod_sdk.tier1_runtime.clock import Clock, get_clock
from agcod_sdk.tier1_runtime.serialize import serialize
from agcod_sdk.tier1_runtime.validate import validate_input


# ── clock ──────────────────────────────────────────────────────────────────

class TestClock:
    def test_now_returns_utc_datetime(self):
        dt = get_clock().now()
        assert dt.tzinfo is not None

    def test_frozen_clock(self):
        fixed = datetime(2025, 1, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)
        clock = Clock().freeze(fixed)
        assert clock.now() == fixed
        assert clock.timestamp_ns() == 1_735_732_800_250_000_000

    def test_naive_datetime_treated_as_utc(self):
        clock = Clock().freeze(datetime(1970, 1, 1, 0, 0, 1))
        assert clock.timestamp_ns() == 1_000_000_000

    def test_advance(self):
        clock = Clock().freeze(datetime(2025, 1, 1, tzinfo=timezone.utc))
        later = clock.advance(2.5)
        assert later.timestamp_ns() - clock.timestamp_ns() == 2_500_000_000

    def test_advance_from_live_clock_freezes(self):
        clock = Clock(ns_fn=lambda: 5_000_000_000)
        assert clock.advance(1).timestamp_ns() == 6_000_000_000


# ── serialize ──────────────────────────────────────────────────────────────

class TestSerialize:
    def test_compact_and_ordered(self):
        body = {"partnerId": "Testp", "value": {"currencyCode": "USD", "amount": 10}}
        assert serialize(body) == '{"partnerId":"Testp","value":{"currencyCode":"USD","amount":10}}'

    def test_serialize_pydantic_model_uses_aliases(self):
        from pydantic import Field

        class Item(BaseModel):
            gc_id: str = Field(alias="gcId")

        assert serialize(Item(gcId="A1")) == '{"gcId":"A1"}'

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            serialize({"amount": float("nan")})


# ── validate ───────────────────────────────────────────────────────────────

class TestValidate:
    def test_valid_input_returns_model(self):
        class Card(BaseModel):
            gc_id: str
            amount: int

        result = validate_input(Card, {"gc_id": "A1", "amount": 5})
        assert result.gc_id == "A1"
        assert result.amount == 5

    def test_invalid_input_raises_validation_error(self):
        from agcod_sdk.tier0_core.errors import ValidationError

        class Card(BaseModel):
            amount: int

        with pytest.raises(ValidationError) as info:
            validate_input(Card, {"amount": "not-a-number"})
        assert "amount" in info.value.fields
