"""
agcod_sdk.tier1_runtime.serialize
──────────────────────────────────
Canonical JSON for request bodies. The serialized string is what gets hashed
into the SigV4 signature, so the same input must always produce the same
bytes: compact separators, insertion-ordered keys, no ASCII escaping games.
"""
from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def serialize(obj: BaseModel | dict | list) -> str:
    """
    Serialize a Pydantic model or dict to a compact JSON string.

    Usage:
        body = serialize({"partnerId": "Abcde"})   # → '{"partnerId":"Abcde"}'
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(obj, separators=(",", ":"), allow_nan=False)


__all__ = ["serialize"]
