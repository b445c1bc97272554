# config/vcap_loader.py

import json
import logging
import os
from collections.abc import Mapping
from typing import Any, ClassVar
from urllib.parse import urlsplit

from config.options import LoaderOptions, load_options
from config.settings import InitializationResult, Settings
from utils.errors import InitializationError

logger = logging.getLogger(__name__)


def _resolve(value: Any, path: str, *keys: str | int, root: str = "") -> Any:
    """Walk ``keys`` down from ``value`` (found at ``path``) and return the
    non-null value reached.

    Raises InitializationError naming the path of the first step that
    cannot be taken (missing key, empty binding list, wrong shape, null).
    ``root`` names the document itself in messages when ``path`` is empty.
    """
    for key in keys:
        where = path or root
        if isinstance(key, int):
            child = f"{path}[{key}]"
            if not isinstance(value, list):
                raise InitializationError(f"{where} is not a list", path)
            if key >= len(value):
                raise InitializationError(f"{where} has no entry at index {key}", child)
        else:
            child = f"{path}.{key}" if path else key
            if not isinstance(value, Mapping):
                raise InitializationError(f"{where} is not an object", path)
            if key not in value:
                raise InitializationError(f"Missing '{key}' in {where}", child)
        value = value[key]
        path = child

    if value is None:
        raise InitializationError(f"{path} is null", path)
    return value


def _host_name(uri: Any, path: str) -> str:
    if not isinstance(uri, str):
        raise InitializationError(
            f"{path} must be a string, got {type(uri).__name__}", path
        )
    try:
        host = urlsplit(uri).hostname
    except ValueError as exc:
        raise InitializationError(f"Malformed URI at {path}: {exc}", path) from exc
    if not host:
        raise InitializationError(f"URI at {path} has no hostname: {uri!r}", path)
    return host


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise InitializationError(
            f"{path} must be a string, got {type(value).__name__}", path
        )
    return value


def _parse_services(environ: Mapping[str, str], options: LoaderOptions) -> Mapping[str, Any]:
    raw = environ.get(options.services_env)
    if raw is None:
        raise InitializationError(
            f"{options.services_env} environment variable is not set",
            options.services_env,
        )
    try:
        services = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise InitializationError(
            f"{options.services_env} is not valid JSON: {exc}", options.services_env
        ) from exc
    if not isinstance(services, Mapping):
        raise InitializationError(
            f"{options.services_env} must be a JSON object, got {type(services).__name__}",
            options.services_env,
        )
    return services


def _extract(
    environ: Mapping[str, str], options: LoaderOptions, values: dict[str, Any]
) -> None:
    """Populate ``values`` in extraction order; stops at the first failure."""
    services = _parse_services(environ, options)
    root = options.services_env

    uaa = f"{options.uaa_service}[0].credentials"
    values["uaa_url"] = _resolve(
        services, "", options.uaa_service, 0, "credentials", "uri", root=root
    )
    values["uaa_host_name"] = _host_name(values["uaa_url"], f"{uaa}.uri")

    # Client credentials come straight from the environment and may be unset.
    values["uaa_client_id"] = environ.get(options.client_id_env)
    values["uaa_client_secret"] = environ.get(options.client_secret_env)

    asset = f"{options.asset_service}[0].credentials"
    asset_credentials = _resolve(
        services, "", options.asset_service, 0, "credentials", root=root
    )
    values["asset_host_name"] = _host_name(
        _resolve(asset_credentials, asset, "uri"), f"{asset}.uri"
    )
    values["asset_zone_id"] = _string(
        _resolve(asset_credentials, asset, "zone", "http-header-value"),
        f"{asset}.zone.http-header-value",
    )

    ts = f"{options.timeseries_service}[0].credentials"
    ts_credentials = _resolve(
        services, "", options.timeseries_service, 0, "credentials", root=root
    )
    query = _resolve(ts_credentials, ts, "query")
    values["time_series_query_host_name"] = _host_name(
        _resolve(query, f"{ts}.query", "uri"), f"{ts}.query.uri"
    )
    values["time_series_zone_id"] = _string(
        _resolve(query, f"{ts}.query", "zone-http-header-value"),
        f"{ts}.query.zone-http-header-value",
    )
    values["time_series_ingest_url"] = _string(
        _resolve(ts_credentials, ts, "ingest", "uri"), f"{ts}.ingest.uri"
    )


def initialize(
    environ: Mapping[str, str] | None = None,
    options: LoaderOptions | None = None,
) -> InitializationResult:
    """Extract Predix service settings from the service-binding environment.

    Args:
        environ: Environment mapping to read. Defaults to ``os.environ``.
        options: Variable names and service labels. Defaults to ``LoaderOptions()``.

    Returns:
        InitializationResult: the Settings snapshot and, on failure, the
        InitializationError that stopped extraction. Fields read before the
        failure keep their values; the rest stay None.

    Observability:
        - Logs ERROR with the failure message (never raises)
    """
    env = os.environ if environ is None else environ
    opts = options or LoaderOptions()
    values: dict[str, Any] = {}

    try:
        _extract(env, opts, values)
    except InitializationError as exc:
        message = str(exc)
        logger.error("%s", message, extra={"services_env": opts.services_env})
        return InitializationResult(
            settings=Settings(**values, initialization_error=message), error=exc
        )

    return InitializationResult(settings=Settings(**values))


class ConfigLoader:
    """
    Singleton holder for the process-wide Settings snapshot.

    Observability:
        - Logs INFO on successful initialization
        - Logs ERROR (via initialize) on failure
        - Tracks config_status for health reporting
    """

    _result: ClassVar[InitializationResult | None] = None
    _config_status: ClassVar[str] = "not_loaded"  # "ok", "error"
    _services_env: ClassVar[str | None] = None

    @classmethod
    def load_settings(
        cls,
        environ: Mapping[str, str] | None = None,
        options: LoaderOptions | None = None,
    ) -> Settings:
        """Initialize settings from the environment if not already done.

        Args:
            environ: Environment mapping. Defaults to ``os.environ``.
            options: Loader options. If not provided, read via ``load_options()``.

        Returns:
            Settings: The cached snapshot (check ``settings.ok``).
        """
        if cls._result is None:
            opts = options or load_options()
            cls._services_env = opts.services_env
            result = initialize(environ, opts)
            cls._result = result
            if result.ok:
                cls._config_status = "ok"
                logger.info(
                    "Service bindings loaded successfully from %s",
                    opts.services_env,
                    extra={"services_env": opts.services_env},
                )
            else:
                cls._config_status = "error"
        return cls._result.settings

    @classmethod
    def get_result(cls) -> InitializationResult | None:
        return cls._result

    @classmethod
    def get_config_status(cls) -> dict[str, Any]:
        """Return config health status for observability endpoints.

        Returns:
            Dict with config_status, services_env, initialization_error and
            whether settings were loaded.
        """
        settings = cls._result.settings if cls._result else None
        return {
            "config_status": cls._config_status,
            "services_env": cls._services_env,
            "initialization_error": settings.initialization_error if settings else None,
            "config_loaded": settings is not None and settings.ok,
        }

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Retrieves a settings value by attribute or exported name.

        Args:
            key (str): The key to retrieve, e.g. "uaa_url" or "uaaUrl".
            default (Any, optional): The default value if the key is unset.

        Returns:
            Any: The value associated with the key.
        """
        if cls._result is None:
            return default
        return cls._result.settings.get(key, default)

    @classmethod
    def reset(cls) -> None:
        """Reset the loader state (useful for testing)."""
        cls._result = None
        cls._config_status = "not_loaded"
        cls._services_env = None
