"""Structured Logging: JSON formatter, setup, and the fault sink used by routes.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (path, method, error_code, form_id) surfaced when present
    - JSON format in production, human-readable in development
    - log_fault never raises; the logging module reports its own handler errors

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

from forms_api.core.domain_types import Environment

_EXTRA_FIELDS = (
    "path", "method", "status_code", "error_code", "category",
    "form_id", "operation", "environment",
)

fault_logger = logging.getLogger("forms_api.faults")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    environment: Environment = Environment.DEVELOPMENT,
):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # SQL statements only while developing
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if environment == Environment.DEVELOPMENT else logging.WARNING,
    )


def log_fault(fault: BaseException) -> None:
    """Record an uncaught fault with its traceback."""
    fault_logger.error(
        f"Unhandled fault: {fault!r}",
        exc_info=(type(fault), fault, fault.__traceback__),
    )
