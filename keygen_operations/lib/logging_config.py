"""JSON logging configuration for key generation operations."""

import logging
import os

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "keygen_operations"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with focused field set.

    Includes only 7 fields: timestamp, level, component, message, exc_info,
    funcName, lineno. The logger name is reported as the component that
    emitted the record.
    """

    def add_fields(self, log_record, record, message_dict):
        """Override to include only specified fields.

        Args:
            log_record: Dict to be logged as JSON
            record: LogRecord object from logging framework
            message_dict: Dict containing message and args
        """
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        # keygen_operations.availability -> availability
        name = log_record.pop("name", record.name)
        log_record["component"] = name.rpartition(".")[2]

        allowed_fields = {
            "timestamp",
            "level",
            "component",
            "message",
            "exc_info",
            "funcName",
            "lineno",
        }

        keys_to_remove = [key for key in log_record if key not in allowed_fields]
        for key in keys_to_remove:
            log_record.pop(key)


def verbose_enabled(value: str | None) -> bool:
    """Interpret the VERBOSE environment variable."""
    if value is None:
        return False
    return value.strip().lower() not in ("", "0", "false", "no", "off")


def _setup_logger() -> logging.Logger:
    """Initialize and configure singleton logger.

    Returns:
        Configured logger with CustomJsonFormatter
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Prevent duplicate handlers if module reloaded
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = CustomJsonFormatter(
        fmt="%(timestamp)s %(levelname)s %(name)s %(funcName)s %(lineno)d %(message)s",
        timestamp=True,
    )
    handler.setFormatter(formatter)

    # Read once per process; core components only log at DEBUG
    logger.setLevel(logging.DEBUG if VERBOSE else logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(component: str) -> logging.Logger:
    """Return the trace logger for a component (e.g. 'orchestrator')."""
    return LOGGER.getChild(component)


VERBOSE = verbose_enabled(os.environ.get("VERBOSE"))

# Singleton logger instance - import this in other modules
LOGGER = _setup_logger()
