# config/options.py

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)


def _get_project_root() -> Path:
    """Derive project root from this file's location: config/options.py -> project root."""
    return Path(__file__).resolve().parent.parent


def default_config_path() -> Path:
    return _get_project_root() / "config" / "config.yaml"


@dataclass(frozen=True)
class LoaderOptions:
    """Names the loader looks up: environment variables and service labels."""

    services_env: str = "VCAP_SERVICES"
    client_id_env: str = "clientId"
    client_secret_env: str = "clientSecret"
    uaa_service: str = "predix-uaa"
    asset_service: str = "predix-asset"
    timeseries_service: str = "predix-timeseries"
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "LoaderOptions":
        """Build options from the parsed YAML mapping.

        Reads the ``vcap`` section for names and ``logging.level`` for the
        log level. Unknown keys and non-string values are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, str] = {}

        vcap = data.get("vcap") or {}
        if isinstance(vcap, dict):
            for key, value in vcap.items():
                if key in known and key != "log_level" and isinstance(value, str) and value.strip():
                    kwargs[key] = value.strip()
                elif key not in known:
                    logger.debug("Ignoring unknown vcap option '%s'", key)

        logging_cfg = data.get("logging") or {}
        if isinstance(logging_cfg, dict):
            level = str(logging_cfg.get("level", "INFO")).upper()
            if level not in VALID_LOG_LEVELS:
                logger.warning(
                    "Invalid logging level '%s' in config. Defaulting to 'INFO'.", level
                )
                level = "INFO"
            kwargs["log_level"] = level

        return cls(**kwargs)


def load_options(config_path: str | None = None) -> LoaderOptions:
    """Load loader options from a YAML file.

    Args:
        config_path: Path to the options file. If not provided, uses the
            CONFIG_PATH env var or defaults to project_root/config/config.yaml.

    Returns:
        LoaderOptions: Parsed options, or defaults if the file is missing or invalid.

    Observability:
        - Logs INFO with resolved path on successful load
        - Logs WARNING if file missing (defaults are used)
        - Logs ERROR if YAML invalid
    """
    # Resolve config path with priority: explicit arg > env var > default
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH")
        if config_path:
            logger.info("Config path overridden via CONFIG_PATH env: %s", config_path)

    if config_path is None:
        config_path = str(default_config_path())

    try:
        with Path(config_path).open(encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(
            "Options file not found at path: %s; using default options.", config_path
        )
        return LoaderOptions()
    except OSError as e:
        logger.exception(
            "Could not read options file at %s: %s; using default options.",
            config_path,
            e,
        )
        return LoaderOptions()
    except yaml.YAMLError as e:
        logger.exception(
            "Error parsing options YAML at %s: %s; using default options.",
            config_path,
            e,
        )
        return LoaderOptions()
    except UnicodeDecodeError as e:
        logger.exception(
            "Encoding error reading options at %s: %s; using default options.",
            config_path,
            e,
        )
        return LoaderOptions()

    if not isinstance(data, dict):
        logger.warning(
            "Options file didn't contain a mapping; using default options."
        )
        return LoaderOptions()

    logger.info("Options loaded successfully from %s", config_path)
    return LoaderOptions.from_mapping(data)
