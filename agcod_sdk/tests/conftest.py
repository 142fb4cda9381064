"""
agcod_sdk test configuration.

All tests run against httpx.MockTransport; no network access required.
Time is frozen through the SDK's own Clock wherever signatures are compared.
"""
from __future__ import annotations

import os
from datetime import datetime, timezone

import httpx
import pytest

# ── Quiet, deterministic settings ─────────────────────────────────────────
# These must be set before any agcod_sdk modules are imported.

os.environ.setdefault("AGCOD_ENV", "sandbox")
os.environ.setdefault("AGCOD_LOG_LEVEL", "WARNING")
os.environ.setdefault("AGCOD_LOG_FORMAT", "console")

ACCESS_KEY = "AKIDEXAMPLE"
SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
FROZEN_AT = datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture
def config_data() -> dict:
    """Raw configuration in the JSON file spelling."""
    return {
        "partnerId": "Testp",
        "credentials": {
            "accessKeyId": ACCESS_KEY,
            "secretAccessKey": SECRET_KEY,
        },
        "endpoint": {
            "NA": {
                "host": "agcod-v2-gamma.amazon.com",
                "region": "us-east-1",
                "countries": ["US", "CA"],
            },
            "EU": {
                "host": "agcod-v2-eu-gamma.amazon.com",
                "region": "eu-west-1",
                "countries": ["DE", "FR", "UK"],
            },
            "FE": {
                "host": "agcod-v2-fe-gamma.amazon.com",
                "region": "us-west-2",
                "countries": ["JP"],
            },
        },
        # FR deliberately has no default currency
        "currency": {"US": "USD", "CA": "CAD", "DE": "EUR", "UK": "GBP", "JP": "JPY"},
    }


@pytest.fixture
def config(config_data):
    from agcod_sdk.tier0_core.config import load_config
    return load_config(config_data)


@pytest.fixture
def frozen_clock():
    from agcod_sdk.tier1_runtime.clock import Clock
    return Clock().freeze(FROZEN_AT)


class Recorder:
    """httpx.MockTransport handler that records every request it receives."""

    def __init__(
        self,
        status_code: int = 200,
        json_body=None,
        content: bytes | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {}
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)


@pytest.fixture
def recorder_factory():
    return Recorder


@pytest.fixture
def make_transport():
    """Build an HttpTransport whose requests go to the given Recorder."""
    from agcod_sdk.tier3_platform.transport import HttpTransport

    def _make(recorder: Recorder) -> HttpTransport:
        return HttpTransport(httpx.AsyncClient(transport=httpx.MockTransport(recorder)))

    return _make


@pytest.fixture
def make_client(config, frozen_clock, make_transport):
    """Build an AgcodClient on the test config, frozen clock and a Recorder."""
    from agcod_sdk.tier3_platform.client import AgcodClient

    def _make(recorder: Recorder, **kwargs):
        kwargs.setdefault("clock", frozen_clock)
        return AgcodClient(config, transport=make_transport(recorder), **kwargs)

    return _make


@pytest.fixture
def route_owned_clients(monkeypatch):
    """Send requests from clients HttpTransport builds itself to the given Recorder."""
    real_client = httpx.AsyncClient

    def _route(recorder: Recorder) -> None:
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(recorder), **kwargs),
        )

    return _route
