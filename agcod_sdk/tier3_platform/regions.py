"""
agcod_sdk.tier3_platform.regions
─────────────────────────────────
Region lookups over the configured endpoint table: country → region
inference, region validation, and default currency per country.
"""
from __future__ import annotations

from agcod_sdk.tier0_core.config import AgcodConfig, Endpoint
from agcod_sdk.tier0_core.errors import (
    NoCurrencyForCountry,
    UnsupportedCountry,
    UnsupportedRegion,
)


class RegionResolver:
    def __init__(self, config: AgcodConfig) -> None:
        self._config = config

    @property
    def regions(self) -> list[str]:
        return self._config.regions

    def resolve_region(self, country: str) -> str:
        """Return the region whose endpoint serves *country*."""
        region = self._config.region_for(country)
        if region is None:
            raise UnsupportedCountry(country)
        return region

    def validate_region(self, region: str) -> str:
        if region not in self._config.endpoint:
            raise UnsupportedRegion(region, self.regions)
        return region

    def endpoint_for(self, region: str) -> Endpoint:
        return self._config.endpoint[self.validate_region(region)]

    def default_currency(self, country: str) -> str:
        currency = self._config.currency.get(country)
        if not currency:
            raise NoCurrencyForCountry(country)
        return currency


__all__ = ["RegionResolver"]
