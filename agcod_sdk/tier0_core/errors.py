"""
agcod_sdk.tier0_core.errors
────────────────────────────
Standard error taxonomy for the AGCOD client. Every error carries a stable
machine-readable code, a user-safe message, and free-form metadata.

Caller-input errors (ValidationError and subclasses) are raised synchronously
before any network call. Upstream errors (TransportError, ApiError) only
surface through the awaitable returned by the client.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class AgcodError(Exception):
    """
    Base class for all SDK errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context, never shown to users
    - status_code: HTTP status code associated with the failure
    """

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Construction-time errors ─────────────────────────────────────────────────

class ConfigurationError(AgcodError):
    """Missing partner id, credentials, or an inconsistent endpoint table."""
    status_code = 500
    code = "configuration_error"


# ── Caller-input errors ───────────────────────────────────────────────────────

class ValidationError(AgcodError):
    """Input validation failure."""
    status_code = 422
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class UnsupportedRegion(ValidationError):
    code = "unsupported_region"

    def __init__(self, region: str, valid: list[str]) -> None:
        self.region = region
        self.valid_regions = list(valid)
        super().__init__(
            user_message="Region must be one of: " + ", ".join(valid),
            fields={"region": region},
        )


class UnsupportedCountry(ValidationError):
    code = "unsupported_country"

    def __init__(self, country: str) -> None:
        self.country = country
        super().__init__(
            user_message=f"No valid country code provided: {country!r}",
            fields={"country": country},
        )


class InvalidAmount(ValidationError):
    code = "invalid_amount"

    def __init__(self, amount: Any) -> None:
        self.amount = amount
        super().__init__(
            user_message="Amounts supplied must be positive!",
            fields={"amount": str(amount)},
        )


class NoCurrencyForCountry(ValidationError):
    code = "no_currency_for_country"

    def __init__(self, country: str) -> None:
        self.country = country
        super().__init__(
            user_message=f"No currency available for country {country!r}",
            fields={"country": country},
        )


# ── Upstream errors ───────────────────────────────────────────────────────────

class UpstreamError(AgcodError):
    """Failure talking to, or reported by, the AGCOD service."""
    status_code = 502
    code = "upstream_error"


class TransportError(UpstreamError):
    """DNS, connection, TLS or timeout failure. The cause is chained."""
    code = "transport_error"

    def __init__(self, cause: BaseException, request: dict[str, Any] | None = None) -> None:
        self.cause = cause
        self.request = request or {}
        super().__init__(
            user_message="Could not reach the gift card service.",
            detail=f"Transport failure: {cause!r}",
        )


class ApiError(UpstreamError):
    """
    Non-200 response. ``payload`` holds the parsed error body; ``metadata``
    holds the same fields merged with ``request`` and ``statusCode``.
    """
    code = "api_error"

    def __init__(
        self,
        status_code: int,
        payload: dict[str, Any],
        request: dict[str, Any],
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        self.request = request
        message = payload.get("message") or payload.get("errorCode") or "request failed"
        super().__init__(
            user_message="The gift card service rejected the request.",
            detail=f"AGCOD returned HTTP {status_code}: {message}",
        )
        self.metadata = {"request": request, "statusCode": status_code, **payload}

    @property
    def error_code(self) -> str | None:
        return self.payload.get("errorCode")

    @property
    def error_type(self) -> str | None:
        return self.payload.get("errorType")

    @property
    def message(self) -> str | None:
        return self.payload.get("message")


class ResponseDecodeError(UpstreamError):
    """The service answered with a body that is not valid JSON."""
    code = "response_decode_error"

    def __init__(self, status_code: int, text: str) -> None:
        self.response_status = status_code
        self.text = text
        super().__init__(
            user_message="The gift card service returned an unreadable response.",
            detail=f"Invalid JSON in HTTP {status_code} response: {text[:200]!r}",
        )


__all__ = [
    "AgcodError",
    "ConfigurationError",
    "ValidationError",
    "UnsupportedRegion",
    "UnsupportedCountry",
    "InvalidAmount",
    "NoCurrencyForCountry",
    "UpstreamError",
    "TransportError",
    "ApiError",
    "ResponseDecodeError",
]
