"""
Structured JSON logging configuration.

This module sets up application-wide JSON logging with:
- Consistent field names across all logs
- Request correlation IDs
- Order, product and customer identifiers for domain operations
- Domain event types
- Timestamp, level, message, path, status code, latency

Logs are output to stdout in JSON format for easy parsing by
log aggregation systems.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
})

# Correlation id of the HTTP request being handled, set by RequestIDMiddleware
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs log records as single-line JSON objects with consistent fields:
    - timestamp: ISO 8601 format with microseconds (UTC)
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - message: Log message
    - logger: Logger name (module path)
    - path, method, status_code, latency_ms, request_id: HTTP context
    - order_id, product_id, customer_id, event_type: domain context
    - exception: Exception details (if exception occurred)
    - any other field passed via ``extra``

    Example output:
        {"timestamp": "2025-11-24T10:30:00.123456", "level": "INFO",
         "message": "Order confirmed", "logger": "ordermanagement.services.order",
         "order_id": 42}
    """

    context_fields = (
        "path",
        "method",
        "status_code",
        "latency_ms",
        "request_id",
        "order_id",
        "product_id",
        "customer_id",
        "event_type",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        for field in self.context_fields:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if "request_id" not in log_data and request_id_var.get() is not None:
            log_data["request_id"] = request_id_var.get()

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data and value is not None:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True
) -> None:
    """
    Configure application logging.

    Sets up:
    - Root logger with specified level
    - JSON formatter (if json_format=True)
    - StreamHandler to stdout
    - Removes default handlers

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatter (True) or simple formatter (False)

    Note:
        Call this once at application startup, before any logging occurs.
    """
    root_logger = logging.getLogger()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        # Simple format for development/debugging
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance with given name.

    Example:
        logger = get_logger(__name__)
        logger.info("Order created", extra={"order_id": 1})
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    request_id: Optional[str] = None,
    order_id: Optional[int] = None,
    product_id: Optional[int] = None,
    customer_id: Optional[int] = None,
    event_type: Optional[str] = None,
    **extra_fields: Any
) -> None:
    """
    Log message with structured context fields.

    Convenience function for logging with common domain context fields.
    None values are left out.

    Example:
        log_with_context(
            logger,
            "info",
            "Stock reserved",
            order_id=7,
            product_id=1,
            quantity=2
        )
    """
    extra: Dict[str, Any] = {
        key: value
        for key, value in {
            "request_id": request_id,
            "order_id": order_id,
            "product_id": product_id,
            "customer_id": customer_id,
            "event_type": event_type,
        }.items()
        if value is not None
    }
    extra.update(extra_fields)

    log_method = getattr(logger, level.lower())
    log_method(message, extra=extra)
