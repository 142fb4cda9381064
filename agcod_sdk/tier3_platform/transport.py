"""
agcod_sdk.tier3_platform.transport
───────────────────────────────────
Sends a SignedRequest over HTTPS and maps the outcome:

- connection, DNS, TLS, timeout failure → TransportError (cause chained)
- HTTP 200                              → parsed JSON body
- any other status                      → ApiError with the parsed error body
- body that is not JSON                 → ResponseDecodeError

No retries, no backoff. Pooling and timeouts are whatever the underlying
httpx client does.

Backed by: httpx (async HTTP).
"""
from __future__ import annotations

from typing import Any

import httpx

from agcod_sdk.tier0_core.errors import ApiError, ResponseDecodeError, TransportError
from agcod_sdk.tier0_core.http import HTTP, SignedRequest
from agcod_sdk.tier0_core.logging import get_logger
from agcod_sdk.tier0_core.redact import redact_dict, scrub_string

log = get_logger(__name__)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ResponseDecodeError(response.status_code, response.text) from exc


class HttpTransport:
    """
    Async HTTP transport for signed AGCOD requests.

    Usage::

        transport = HttpTransport(timeout=10.0)
        result = await transport.send(signed)

    Pass ``client`` to reuse an existing httpx.AsyncClient (or one built on
    httpx.MockTransport in tests); a client passed in is not closed by aclose().
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(self, signed: SignedRequest) -> Any:
        request = signed.as_dict()
        log.info("agcod.request.sent", method=signed.method, url=signed.url)
        try:
            response = await self._get_client().request(
                signed.method,
                signed.url,
                headers=signed.headers,
                content=signed.body.encode("utf-8"),
            )
        except httpx.TransportError as exc:
            log.warning("agcod.transport.failed", url=signed.url, error=scrub_string(repr(exc)))
            raise TransportError(exc, request=request) from exc

        if response.status_code != HTTP.OK:
            data = _decode(response)
            payload = data if isinstance(data, dict) else {"body": data}
            log.warning(
                "agcod.response.error",
                url=signed.url,
                status_code=response.status_code,
                payload=redact_dict(payload),
            )
            raise ApiError(response.status_code, payload, request)

        result = _decode(response)
        log.info("agcod.response.ok", url=signed.url, status_code=response.status_code)
        return result

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["HttpTransport"]
