import json
import logging
import logging.handlers
import sys
from pathlib import Path

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CustomJsonFormatter(logging.Formatter):
    def __init__(self, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record_dict = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "message": record.getMessage(),
        }

        # Include standard extra fields
        if hasattr(record, "services_env"):
            record_dict["services_env"] = record.services_env  # type: ignore[attr-defined]

        if record.exc_info:
            record_dict["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(record_dict, ensure_ascii=False)


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Setup structured logging with JSON formatting on stderr and, optionally,
    a daily rotated log file.

    Args:
        level: Logging level name (default: "INFO"). Unknown names fall back to INFO.
        log_file: Optional path to a log file rotated at midnight UTC.
    """
    level_name = (level or "INFO").upper()
    if level_name not in _VALID_LEVELS:
        level_name = "INFO"
    log_level = getattr(logging, level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = CustomJsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        if not log_path.parent.exists():
            log_path.parent.mkdir(parents=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_path),
            when="midnight",
            interval=1,
            backupCount=30,
            utc=True,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Convenience method for retrieving a logger
    """
    return logging.getLogger(name)


def set_module_logging_level(module_name: str, level: int) -> None:
    """
    Sets the logging level for a specific module.

    Args:
        module_name (str): The name of the module (e.g., 'config.vcap_loader').
        level (int): The logging level (e.g., logging.INFO).
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(level)
