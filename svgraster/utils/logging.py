import logging
import sys
from typing import Any, Dict, Optional

import structlog


def add_logger_context(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Render exceptions passed as ``error=`` as their message only."""
    error = event_dict.get("error")
    if isinstance(error, BaseException):
        event_dict["error"] = str(error) or type(error).__name__
        event_dict.setdefault("error_type", type(error).__name__)
    return event_dict


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structured logging for svgraster.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON format for logs instead of the console renderer
    """
    level = getattr(logging, log_level.upper())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_logger_context,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        handlers=[console_handler],
        level=level,
        force=True,
    )

    # Suppress noisy loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


class LoggingContext:
    """Context manager that binds key/value pairs to every log entry inside it."""

    def __init__(self, **kwargs) -> None:
        self.context = kwargs
        self.tokens = {}

    def __enter__(self) -> "LoggingContext":
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        structlog.contextvars.reset_contextvars(**self.tokens)
