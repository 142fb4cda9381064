"""
agcod_sdk.tier3_platform.client
────────────────────────────────
AgcodClient: the public entry point. Each call validates its input, builds
the request body, signs it, and schedules the HTTP round trip on the running
event loop.

Input problems (unknown region or country, negative amount, no default
currency) raise immediately, before anything is sent. Network and API
failures only surface when the returned operation is awaited.

Usage::

    async with AgcodClient(load_config()) as client:
        op = client.create_gift_card("US", 10)
        keep = op.sequential_id            # available before the response
        card = await op                    # {"gcId": ..., "gcClaimCode": ...}
        await client.cancel_gift_card("NA", keep, card["gcId"])
"""
from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generator

from agcod_sdk.tier0_core.config import AgcodConfig, get_settings, load_config
from agcod_sdk.tier0_core.errors import InvalidAmount
from agcod_sdk.tier0_core.http import CANCEL_GIFT_CARD, CREATE_GIFT_CARD, SignedRequest
from agcod_sdk.tier0_core.ids import new_sequential_id
from agcod_sdk.tier0_core.logging import get_logger
from agcod_sdk.tier1_runtime.clock import Clock
from agcod_sdk.tier2_reliability.signer import RequestSigner
from agcod_sdk.tier3_platform.bodies import build_cancel_request, build_create_request
from agcod_sdk.tier3_platform.regions import RegionResolver
from agcod_sdk.tier3_platform.transport import HttpTransport

log = get_logger(__name__)


@dataclass
class GiftCardOperation:
    """
    An in-flight AGCOD call. ``response`` resolves exactly once, to the parsed
    JSON body or to TransportError / ApiError / ResponseDecodeError.
    Awaiting the operation awaits ``response``.
    """
    response: asyncio.Task
    sequential_id: str
    request_body: dict[str, Any]
    signed_request: SignedRequest

    def __await__(self) -> Generator[Any, None, Any]:
        return self.response.__await__()

    def done(self) -> bool:
        return self.response.done()


class AgcodClient:
    def __init__(
        self,
        config: AgcodConfig | dict[str, Any] | str | Path | None = None,
        *,
        transport: HttpTransport | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = load_config(config)
        self._regions = RegionResolver(self.config)
        self._signer = RequestSigner(
            self.config.credentials,
            self.config.extra_headers,
            clock=clock,
        )
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport(timeout=get_settings().timeout)
        self._clock = clock

    # ── Public operations ─────────────────────────────────────────────────────

    def create_gift_card(
        self,
        country: str,
        amount: int | float,
        currency_code: str | None = None,
    ) -> GiftCardOperation:
        """Issue a new gift card worth *amount* in *country*."""
        region = self._regions.resolve_region(country)
        if not math.isfinite(amount) or amount < 0:
            raise InvalidAmount(amount)
        if currency_code is None:
            currency_code = self._regions.default_currency(country)

        sequential_id = new_sequential_id(self._clock)
        return self._create(region, amount, currency_code, sequential_id)

    def create_gift_card_again(
        self,
        region: str,
        amount: int | float,
        currency_code: str,
        sequential_id: str,
    ) -> GiftCardOperation:
        """
        Resubmit a creation under an existing sequential id, e.g. after a
        timeout left its outcome unknown. AGCOD treats it as the same request.
        """
        self._regions.validate_region(region)
        return self._create(region, amount, currency_code, sequential_id)

    def cancel_gift_card(
        self,
        region: str,
        sequential_id: str,
        gc_id: str,
    ) -> GiftCardOperation:
        """Cancel the gift card *gc_id* created under *sequential_id*."""
        self._regions.validate_region(region)
        body = build_cancel_request(self.config.partner_id, sequential_id, gc_id)
        log.info("agcod.gift_card.cancel", region=region, sequential_id=sequential_id, gc_id=gc_id)
        return self._dispatch(region, CANCEL_GIFT_CARD, body, sequential_id)

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "AgcodClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _create(
        self,
        region: str,
        amount: int | float,
        currency_code: str,
        sequential_id: str,
    ) -> GiftCardOperation:
        body = build_create_request(self.config.partner_id, sequential_id, amount, currency_code)
        log.info(
            "agcod.gift_card.create",
            region=region,
            sequential_id=sequential_id,
            amount=amount,
            currency_code=currency_code,
        )
        return self._dispatch(region, CREATE_GIFT_CARD, body, sequential_id)

    def _dispatch(
        self,
        region: str,
        action: str,
        body: dict[str, Any],
        sequential_id: str,
    ) -> GiftCardOperation:
        # Fails with RuntimeError outside a running loop, before the coroutine exists.
        loop = asyncio.get_running_loop()
        signed = self._signer.sign(self._regions.endpoint_for(region), action, body)
        task = loop.create_task(self._transport.send(signed))
        return GiftCardOperation(
            response=task,
            sequential_id=sequential_id,
            request_body=body,
            signed_request=signed,
        )


__all__ = ["AgcodClient", "GiftCardOperation"]
