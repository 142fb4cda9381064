"""
agcod_sdk.tier2_reliability.signer
───────────────────────────────────
AWS Signature Version 4 signing for AGCOD requests.

Every request is a POST of a JSON body to ``/<Action>`` on the regional host.
The signer fixes the AGCOD headers, layers the configured extra headers on
top (extra headers win on a name clash), adds ``host`` and ``x-amz-date``,
signs every header, and returns a SignedRequest carrying the
``authorization`` header.

The canonical pieces (canonical request, string to sign, signing key) are
module-level functions so a signature can be re-derived independently.
"""
from __future__ import annotations

from typing import Any, Mapping

from agcod_sdk.tier0_core.config import Credentials, Endpoint
from agcod_sdk.tier0_core.errors import ConfigurationError
from agcod_sdk.tier0_core.http import (
    JSON_CONTENT_TYPE,
    METHOD,
    SERVICE_NAME,
    TARGET_PREFIX,
    SignedRequest,
)
from agcod_sdk.tier0_core.logging import get_logger
from agcod_sdk.tier1_runtime.clock import Clock, get_clock
from agcod_sdk.tier1_runtime.serialize import serialize
from agcod_sdk.tier2_reliability.crypto import hmac_sha256, hmac_sign, sha256_hex

log = get_logger(__name__)

ALGORITHM = "AWS4-HMAC-SHA256"
TERMINATOR = "aws4_request"


# ── Canonical pieces ──────────────────────────────────────────────────────────

def _normalize_value(value: Any) -> str:
    return " ".join(str(value).strip().split())


def merge_headers(base: Mapping[str, str], extra: Mapping[str, str] | None) -> dict[str, str]:
    """Lower-case header names and overlay *extra* on *base*."""
    merged = {k.lower(): str(v) for k, v in base.items()}
    for k, v in (extra or {}).items():
        merged[k.lower()] = str(v)
    return merged


def canonical_request(
    method: str,
    path: str,
    headers: Mapping[str, str],
    body: str,
    query: str = "",
) -> tuple[str, str]:
    """Return (canonical_request, signed_headers) for the given request parts."""
    lowered = {k.lower(): _normalize_value(v) for k, v in headers.items()}
    names = sorted(lowered)
    canonical_headers = "".join(f"{name}:{lowered[name]}\n" for name in names)
    signed_headers = ";".join(names)
    request = "\n".join([
        method.upper(),
        path,
        query,
        canonical_headers,
        signed_headers,
        sha256_hex(body),
    ])
    return request, signed_headers


def credential_scope(date_stamp: str, region: str, service: str = SERVICE_NAME) -> str:
    return f"{date_stamp}/{region}/{service}/{TERMINATOR}"


def string_to_sign(amz_date: str, scope: str, canonical: str) -> str:
    return "\n".join([ALGORITHM, amz_date, scope, sha256_hex(canonical)])


def derive_signing_key(
    secret_key: str,
    date_stamp: str,
    region: str,
    service: str = SERVICE_NAME,
) -> bytes:
    k_date = hmac_sha256("AWS4" + secret_key, date_stamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, TERMINATOR)


# ── Signer ────────────────────────────────────────────────────────────────────

class RequestSigner:
    """
    Signs AGCOD requests with static credentials.

    Usage::

        signer = RequestSigner(config.credentials, config.extra_headers)
        signed = signer.sign(config.endpoint["NA"], "CreateGiftCard", body)
    """

    def __init__(
        self,
        credentials: Credentials,
        extra_headers: Mapping[str, str] | None = None,
        *,
        clock: Clock | None = None,
        service: str = SERVICE_NAME,
    ) -> None:
        self._credentials = credentials
        self._extra_headers = dict(extra_headers or {})
        self._clock = clock
        self._service = service

    def default_headers(self, action: str) -> dict[str, str]:
        return {
            "accept": JSON_CONTENT_TYPE,
            "content-type": JSON_CONTENT_TYPE,
            "x-amz-target": f"{TARGET_PREFIX}.{action}",
        }

    def sign(
        self,
        endpoint: Endpoint,
        action: str,
        body: Mapping[str, Any] | str,
    ) -> SignedRequest:
        access_key = self._credentials.access_key_id
        secret_key = self._credentials.secret_access_key.get_secret_value()
        if not access_key or not secret_key:
            raise ConfigurationError(user_message="Cannot sign request without credentials")

        payload = body if isinstance(body, str) else serialize(dict(body))
        path = f"/{action}"

        moment = (self._clock or get_clock()).now()
        amz_date = moment.strftime("%Y%m%dT%H%M%SZ")
        date_stamp = moment.strftime("%Y%m%d")

        headers = merge_headers(self.default_headers(action), self._extra_headers)
        headers["host"] = endpoint.host
        headers["x-amz-date"] = amz_date
        if self._credentials.session_token is not None:
            headers["x-amz-security-token"] = self._credentials.session_token.get_secret_value()

        canonical, signed_headers = canonical_request(METHOD, path, headers, payload)
        scope = credential_scope(date_stamp, endpoint.region, self._service)
        key = derive_signing_key(secret_key, date_stamp, endpoint.region, self._service)
        signature = hmac_sign(key, string_to_sign(amz_date, scope, canonical))

        headers["authorization"] = (
            f"{ALGORITHM} Credential={access_key}/{scope}, "
            f"SignedHeaders={signed_headers}, Signature={signature}"
        )

        log.debug(
            "agcod.request.signed",
            action=action,
            host=endpoint.host,
            signing_region=endpoint.region,
            signed_headers=signed_headers,
        )
        return SignedRequest(host=endpoint.host, path=path, body=payload, headers=headers)


__all__ = [
    "ALGORITHM",
    "RequestSigner",
    "merge_headers",
    "canonical_request",
    "credential_scope",
    "string_to_sign",
    "derive_signing_key",
]
