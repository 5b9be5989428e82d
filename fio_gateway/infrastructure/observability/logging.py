"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from fio_gateway.config import settings

TRANSPORT_LOGGERS = ("httpx", "httpcore")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # httpx logs every request URL at INFO, and Fio URLs carry the token.
    # Calls are logged by log_fio_call with the URL redacted instead.
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_fio_call(
    operation: str,
    url: str,
    outcome: str,
    duration_ms: float,
) -> None:
    """Log structured outcome of one Fio API call. `url` must already be sanitized."""
    level = logging.INFO if outcome.startswith("2") else logging.WARNING
    logging.getLogger("fio_gateway.fio").log(
        level,
        "Fio API call completed",
        extra={
            "step": "fio_call",
            "operation": operation,
            "url": url,
            "outcome": outcome,
            "duration_ms": duration_ms,
        },
    )
