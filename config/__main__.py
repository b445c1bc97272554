# config/__main__.py
# Startup check: resolve Predix service bindings from the current environment
# and report them. Exits non-zero when initialization failed so deploy hooks
# can fail fast.

import argparse
import json
import sys

from config.options import load_options
from config.vcap_loader import ConfigLoader
from utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m config",
        description="Check Predix service bindings (VCAP_SERVICES) for this process.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the loader options YAML (default: CONFIG_PATH or config/config.yaml).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the logging level from the options file.",
    )
    parser.add_argument(
        "--show-secrets",
        action="store_true",
        help="Print the UAA client secret instead of masking it.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    options = load_options(args.config)
    setup_logging(args.log_level or options.log_level)

    ConfigLoader.reset()
    settings = ConfigLoader.load_settings(options=options)
    status = ConfigLoader.get_config_status()

    report = {
        "status": status,
        "settings": settings.as_dict(redact=not args.show_secrets),
    }
    print(json.dumps(report, indent=2))

    if not settings.ok:
        logger.error("Service binding check failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
