"""
agcod_sdk.tier3_platform.bodies
────────────────────────────────
Request bodies for the two AGCOD actions, in the remote schema's spelling.

AGCOD requires ``creationRequestId`` to start with the partner id, so the id
sent on the wire is the partner id followed by the sequential id. Resubmitting
with the same sequential id therefore addresses the same logical creation.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agcod_sdk.tier1_runtime.validate import validate_input


class GiftCardValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    currency_code: str = Field(alias="currencyCode", pattern=r"^[A-Z]{3}$")
    amount: int | float

    @field_validator("currency_code", mode="before")
    @classmethod
    def upper_currency(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


class CreateGiftCardRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    creation_request_id: str = Field(alias="creationRequestId", min_length=1)
    partner_id: str = Field(alias="partnerId", min_length=1)
    value: GiftCardValue


class CancelGiftCardRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    creation_request_id: str = Field(alias="creationRequestId", min_length=1)
    partner_id: str = Field(alias="partnerId", min_length=1)
    gc_id: str = Field(alias="gcId", min_length=1)


def creation_request_id(partner_id: str, sequential_id: str) -> str:
    return f"{partner_id}{sequential_id}"


def build_create_request(
    partner_id: str,
    sequential_id: str,
    amount: int | float,
    currency_code: str,
) -> dict[str, Any]:
    """Body for CreateGiftCard."""
    model = validate_input(CreateGiftCardRequest, {
        "creationRequestId": creation_request_id(partner_id, sequential_id),
        "partnerId": partner_id,
        "value": {"currencyCode": currency_code, "amount": amount},
    })
    return model.model_dump(mode="json", by_alias=True)


def build_cancel_request(partner_id: str, sequential_id: str, gc_id: str) -> dict[str, Any]:
    """Body for CancelGiftCard."""
    model = validate_input(CancelGiftCardRequest, {
        "creationRequestId": creation_request_id(partner_id, sequential_id),
        "partnerId": partner_id,
        "gcId": gc_id,
    })
    return model.model_dump(mode="json", by_alias=True)


__all__ = [
    "GiftCardValue",
    "CreateGiftCardRequest",
    "CancelGiftCardRequest",
    "creation_request_id",
    "build_create_request",
    "build_cancel_request",
]
