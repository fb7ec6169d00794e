"""Structured logging configuration using structlog."""
import logging
import sys
from enum import Enum
from typing import Any, Optional, TextIO

import structlog
from pythonjsonlogger import jsonlogger

from src.config.settings import settings

QUIET_LOGGERS = ("httpcore", "httpx")


def add_reservation_prefix(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add [RES-<id>] prefix to log message if reserva_id is present.

    Args:
        logger: The logger instance
        method_name: The name of the method being called
        event_dict: The event dictionary containing log data

    Returns:
        Modified event dictionary with reservation prefix
    """
    reserva_id = event_dict.get("reserva_id")
    if reserva_id:
        current_event = event_dict.get("event", "")
        event_dict["event"] = f"[RES-{reserva_id}] {current_event}"
    return event_dict


def render_enum_values(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace enum fields (states, tiers, error kinds) with their plain values."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def configure_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Configure structlog for the application.

    Args:
        level: Log level name; defaults to settings.logging.level
        stream: Output stream; defaults to stderr
    """
    log_level = getattr(logging, (level or settings.logging.level).upper())
    use_json = settings.logging.format == "json"

    # stdout is reserved for the runner's JSON result
    handler = logging.StreamHandler(stream or sys.stderr)
    if use_json:
        handler.setFormatter(jsonlogger.JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            render_enum_values,
            add_reservation_prefix,
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Get a configured logger instance.

    Args:
        name: Logger name, typically __name__
    """
    return structlog.get_logger(name)
