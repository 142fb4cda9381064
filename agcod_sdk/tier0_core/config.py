"""
agcod_sdk.tier0_core.config
────────────────────────────
Two layers of configuration:

- AgcodSettings: process settings read from .env → environment variables
  (which config file to load, logging, HTTP timeout).
- AgcodConfig: the immutable client configuration (partner id, credentials,
  regional endpoints, default currencies, extra headers). Loaded once and
  passed explicitly to the client; there is no global mutable config.

Missing partner id or credentials raise ConfigurationError at load time,
not at request time.

Minimal stack: pydantic + pydantic-settings + python-dotenv
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SecretStr,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from agcod_sdk.tier0_core.errors import ConfigurationError


# ── Process settings ─────────────────────────────────────────────────────────

class AgcodSettings(BaseSettings):
    """Environment-driven settings. All env vars are prefixed with AGCOD_."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Config file selection ─────────────────────────────────────────────────
    environment: str = Field(default="sandbox", alias="AGCOD_ENV")
    config_dir: str = Field(default="./.agcod", alias="AGCOD_CONFIG_DIR")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="AGCOD_LOG_LEVEL")
    log_format: str = Field(default="json", alias="AGCOD_LOG_FORMAT")

    # ── Transport ─────────────────────────────────────────────────────────────
    timeout: float | None = Field(default=None, alias="AGCOD_TIMEOUT")

    @field_validator("environment")
    @classmethod
    def normalize_env(cls, v: str) -> str:
        return v.strip().lower() or "sandbox"

    @property
    def config_path(self) -> Path:
        return Path(self.config_dir) / f"{self.environment}.json"


@lru_cache(maxsize=1)
def get_settings() -> AgcodSettings:
    """
    Return the singleton settings. Cached after first call.
    Call _reset_settings() in tests to pick up new env vars.
    """
    return AgcodSettings()


def _reset_settings() -> None:
    """For tests: clear the settings cache."""
    get_settings.cache_clear()


# ── Client configuration ─────────────────────────────────────────────────────

class Endpoint(BaseModel):
    """One regional AGCOD deployment."""

    model_config = ConfigDict(frozen=True)

    host: str
    region: str
    countries: tuple[str, ...] = ()


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    access_key_id: str = Field(default="", alias="accessKeyId")
    secret_access_key: SecretStr = Field(default=SecretStr(""), alias="secretAccessKey")
    session_token: SecretStr | None = Field(default=None, alias="sessionToken")


class AgcodConfig(BaseModel):
    """
    Immutable client configuration. Accepts the JSON spelling used by config
    files (partnerId, accessKeyId, ...) as well as the Python field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    partner_id: str = Field(default="", alias="partnerId")
    credentials: Credentials = Field(default_factory=Credentials)
    endpoint: Mapping[str, Endpoint] = Field(default_factory=dict)
    currency: Mapping[str, str] = Field(default_factory=dict)
    extra_headers: Mapping[str, str] = Field(default_factory=dict, alias="extraHeaders")

    _country_regions: Mapping[str, str] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_required(self) -> "AgcodConfig":
        if not self.partner_id:
            raise ConfigurationError(user_message="No partner ID supplied")
        creds = self.credentials
        if not creds.access_key_id or not creds.secret_access_key.get_secret_value():
            raise ConfigurationError(user_message="Invalid credentials supplied!")

        # Countries must map to exactly one region for inference to work.
        regions: dict[str, str] = {}
        for region, endpoint in self.endpoint.items():
            for country in endpoint.countries:
                if country in regions:
                    raise ConfigurationError(
                        user_message=(
                            f"Country {country!r} is listed under both "
                            f"{regions[country]} and {region}"
                        ),
                    )
                regions[country] = region
        self._country_regions = MappingProxyType(regions)

        # Read-only views, so the tables stay in step with the country map.
        for name in ("endpoint", "currency", "extra_headers"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        return self

    @property
    def regions(self) -> list[str]:
        return list(self.endpoint)

    @property
    def country_regions(self) -> dict[str, str]:
        return dict(self._country_regions)

    def region_for(self, country: str) -> str | None:
        return self._country_regions.get(country)


# ── Built-in endpoint tables ─────────────────────────────────────────────────

_NA_COUNTRIES = ["US", "CA"]
_EU_COUNTRIES = ["IT", "ES", "DE", "FR", "UK"]
_FE_COUNTRIES = ["JP"]

_DEFAULT_CURRENCY = {
    "US": "USD",
    "CA": "CAD",
    "IT": "EUR",
    "ES": "EUR",
    "DE": "EUR",
    "FR": "EUR",
    "UK": "GBP",
    "JP": "JPY",
}

DEFAULTS: dict[str, dict[str, Any]] = {
    "sandbox": {
        "endpoint": {
            "NA": {"host": "agcod-v2-gamma.amazon.com", "region": "us-east-1", "countries": _NA_COUNTRIES},
            "EU": {"host": "agcod-v2-eu-gamma.amazon.com", "region": "eu-west-1", "countries": _EU_COUNTRIES},
            "FE": {"host": "agcod-v2-fe-gamma.amazon.com", "region": "us-west-2", "countries": _FE_COUNTRIES},
        },
        "currency": _DEFAULT_CURRENCY,
    },
    "production": {
        "endpoint": {
            "NA": {"host": "agcod-v2.amazon.com", "region": "us-east-1", "countries": _NA_COUNTRIES},
            "EU": {"host": "agcod-v2-eu.amazon.com", "region": "eu-west-1", "countries": _EU_COUNTRIES},
            "FE": {"host": "agcod-v2-fe.amazon.com", "region": "us-west-2", "countries": _FE_COUNTRIES},
        },
        "currency": _DEFAULT_CURRENCY,
    },
}


def defaults_for(environment: str) -> dict[str, Any]:
    """Endpoint and currency tables for *environment* (production or sandbox)."""
    key = "production" if environment == "production" else "sandbox"
    return json.loads(json.dumps(DEFAULTS[key]))


# ── Loading ───────────────────────────────────────────────────────────────────

def parse_config(data: dict[str, Any]) -> AgcodConfig:
    """
    Validate a raw mapping into an AgcodConfig.
    Raises ConfigurationError (not Pydantic's) on failure.
    """
    try:
        return AgcodConfig.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ConfigurationError(
            user_message="Invalid AGCOD configuration.",
            detail=f"Invalid AGCOD configuration: {fields}",
            fields=fields,
        ) from exc


def read_config_file(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    try:
        with p.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(
            user_message=f"Configuration file not found: {p}",
        ) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            user_message=f"Configuration file is not valid JSON: {p}",
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(user_message=f"Configuration file must hold an object: {p}")
    return data


def load_config(
    source: AgcodConfig | dict[str, Any] | str | Path | None = None,
    *,
    settings: AgcodSettings | None = None,
) -> AgcodConfig:
    """
    Resolve the client configuration.

    - AgcodConfig: returned as is.
    - non-empty dict: used inline.
    - str / Path: read as a JSON file.
    - None or {}: read <AGCOD_CONFIG_DIR>/<AGCOD_ENV>.json.

    Inline and file data are layered over the built-in endpoint and currency
    tables for the selected environment; top-level keys replace defaults.
    """
    if isinstance(source, AgcodConfig):
        return source

    settings = settings or get_settings()
    if isinstance(source, (str, Path)):
        data = read_config_file(source)
    elif source:
        data = dict(source)
    else:
        data = read_config_file(settings.config_path)

    merged = {**defaults_for(settings.environment), **data}
    return parse_config(merged)


__all__ = [
    "AgcodSettings",
    "get_settings",
    "AgcodConfig",
    "Credentials",
    "Endpoint",
    "DEFAULTS",
    "defaults_for",
    "parse_config",
    "read_config_file",
    "load_config",
]
