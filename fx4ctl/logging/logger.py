"""
FX4CTL Structured Logging

JSON log lines for the module and its CLI host. Every entry carries
timestamp, level, instance_id and message. Records about an appliance
command also carry the command context (host, action, method, path,
outcome) that the client and dispatcher attach through `extra=`.
"""

import logging
import logging.config
import json
import os
from datetime import datetime, timezone
from typing import Optional

import yaml


COMMAND_FIELDS = ("host", "action", "method", "path", "outcome")


class StructuredFormatter(logging.Formatter):
    """Formats records as one JSON object per line"""

    def __init__(self, instance_id: str = "fx4"):
        super().__init__()
        self.instance_id = instance_id

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "instance_id": self.instance_id,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in COMMAND_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.levelno >= logging.WARNING or record.exc_info:
            log_data["source"] = f"{record.module}.{record.funcName}:{record.lineno}"

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


def command_context(**fields) -> dict:
    """
    Build an `extra=` mapping for a command-related log call.

    Unknown names and None values are dropped so the mapping never
    collides with LogRecord attributes.

    Example:
        >>> logger.debug("sent", extra=command_context(host="10.0.0.5", path="/RebootDevice.cgx"))
    """
    return {
        name: value for name, value in fields.items()
        if name in COMMAND_FIELDS and value is not None
    }


def _console_handler(instance_id: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter(instance_id))
    return handler


def get_logger(name: str, instance_id: str = "fx4", level: int = logging.INFO) -> logging.Logger:
    """
    Get a structured logger, e.g. the one behind the CLI's host sink.

    Args:
        name: Logger name
        instance_id: Module instance label stamped on every line
        level: Logging level (default: INFO)

    Returns:
        Logger with a single JSON console handler
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(level)
        logger.addHandler(_console_handler(instance_id, level))
        logger.propagate = False

    return logger


def configure_logging(
    config_path: Optional[str] = None,
    default_level: int = logging.INFO,
    instance_id: str = "fx4"
) -> bool:
    """
    Configure logging from a dictConfig YAML file.

    When the file is missing or unusable, the root logger gets a JSON
    console handler at `default_level` instead.

    Args:
        config_path: Path to YAML logging config
        default_level: Level for the fallback handler
        instance_id: Label for the fallback formatter

    Returns:
        True if the YAML config was applied, False if the fallback was used
    """
    if config_path and os.path.isfile(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as handle:
                config = yaml.safe_load(handle)

            if not isinstance(config, dict) or not config:
                raise ValueError("Logging config is empty")

            logging.config.dictConfig(config)
            return True
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logging.getLogger(__name__).warning(f"Ignoring logging config {config_path}: {e}")

    logging.basicConfig(level=default_level, handlers=[_console_handler(instance_id, default_level)])
    return False
