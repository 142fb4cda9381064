"""
agcod_sdk.tier0_core.http
──────────────────────────
HTTP primitives shared by the signer and the transport: status codes, the
fixed AGCOD wire constants, and the signed request descriptor.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes the client distinguishes."""

    OK = 200


# ── AGCOD wire constants ───────────────────────────────────────────────────

SERVICE_NAME = "AGCODService"
TARGET_PREFIX = "com.amazonaws.agcod.AGCODService"
METHOD = "POST"
JSON_CONTENT_TYPE = "application/json"

CREATE_GIFT_CARD = "CreateGiftCard"
CANCEL_GIFT_CARD = "CancelGiftCard"


# ── Signed request descriptor ─────────────────────────────────────────────

@dataclass(frozen=True)
class SignedRequest:
    """A fully prepared request, ready for the transport."""
    host: str
    path: str
    body: str
    headers: dict[str, str] = field(default_factory=dict)
    method: str = METHOD

    @property
    def url(self) -> str:
        return f"https://{self.host}{self.path}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "body": self.body,
        }


__all__ = [
    "HTTP",
    "SERVICE_NAME",
    "TARGET_PREFIX",
    "METHOD",
    "JSON_CONTENT_TYPE",
    "CREATE_GIFT_CARD",
    "CANCEL_GIFT_CARD",
    "SignedRequest",
]
