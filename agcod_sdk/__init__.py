"""
agcod_sdk
─────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from agcod_sdk.tier0_core.config import (
    AgcodConfig,
    AgcodSettings,
    Credentials,
    Endpoint,
    get_settings,
    load_config,
)
from agcod_sdk.tier0_core.errors import (
    AgcodError,
    ApiError,
    ConfigurationError,
    InvalidAmount,
    NoCurrencyForCountry,
    ResponseDecodeError,
    TransportError,
    UnsupportedCountry,
    UnsupportedRegion,
    UpstreamError,
    ValidationError,
)
from agcod_sdk.tier0_core.http import SignedRequest
from agcod_sdk.tier0_core.ids import new_sequential_id
from agcod_sdk.tier0_core.logging import get_logger
from agcod_sdk.tier1_runtime.clock import Clock
from agcod_sdk.tier2_reliability.signer import RequestSigner
from agcod_sdk.tier3_platform.bodies import build_cancel_request, build_create_request
from agcod_sdk.tier3_platform.client import AgcodClient, GiftCardOperation
from agcod_sdk.tier3_platform.regions import RegionResolver
from agcod_sdk.tier3_platform.transport import HttpTransport

__version__ = "0.1.0"
__all__ = [
    # client
    "AgcodClient", "GiftCardOperation",
    # config
    "AgcodConfig", "AgcodSettings", "Credentials", "Endpoint",
    "get_settings", "load_config",
    # errors
    "AgcodError", "ConfigurationError", "ValidationError",
    "UnsupportedRegion", "UnsupportedCountry", "InvalidAmount",
    "NoCurrencyForCountry", "UpstreamError", "TransportError",
    "ApiError", "ResponseDecodeError",
    # building blocks
    "RegionResolver", "RequestSigner", "HttpTransport", "SignedRequest",
    "build_create_request", "build_cancel_request",
    "new_sequential_id", "Clock",
    # logging
    "get_logger",
]
