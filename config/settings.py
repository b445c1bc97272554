"""
Settings value objects produced from the service-binding document.

``Settings`` is the flat, read-only snapshot consumed by the rest of the
application. ``InitializationResult`` pairs it with the error (if any) that
stopped extraction.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from utils.errors import InitializationError

REDACTED = "********"

# Attribute name -> exported key, in extraction order.
EXPORTED_KEYS: dict[str, str] = {
    "uaa_url": "uaaUrl",
    "uaa_host_name": "uaaHostName",
    "uaa_client_id": "uaaClientId",
    "uaa_client_secret": "uaaClientSecret",
    "asset_host_name": "assetHostName",
    "asset_zone_id": "assetZoneId",
    "time_series_query_host_name": "timeSeriesQueryHostName",
    "time_series_zone_id": "timeSeriesZoneId",
    "time_series_ingest_url": "timeSeriesIngestUrl",
    "initialization_error": "initializationError",
}


@dataclass(frozen=True)
class Settings:
    uaa_url: str | None = None
    uaa_host_name: str | None = None
    uaa_client_id: str | None = None
    uaa_client_secret: str | None = field(default=None, repr=False)
    asset_host_name: str | None = None
    asset_zone_id: str | None = None
    time_series_query_host_name: str | None = None
    time_series_zone_id: str | None = None
    time_series_ingest_url: str | None = None
    initialization_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.initialization_error is None

    def as_dict(self, redact: bool = False) -> dict[str, Any]:
        """Return the settings keyed by their exported camelCase names.

        With ``redact=True`` a non-empty client secret is masked.
        """
        data = {EXPORTED_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}
        if redact and data["uaaClientSecret"]:
            data["uaaClientSecret"] = REDACTED
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Look a value up by attribute name or exported name."""
        for attr, exported in EXPORTED_KEYS.items():
            if key in (attr, exported):
                value = getattr(self, attr)
                return default if value is None else value
        return default


@dataclass(frozen=True)
class InitializationResult:
    settings: Settings
    error: InitializationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
