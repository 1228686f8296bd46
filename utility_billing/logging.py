"""Logging configuration for utility-billing.

Ledger and service log calls attach billing context through
``extra=log_context(...)``. Both formatters render that context: the
standard one as trailing ``key=value`` pairs, the JSON one as top-level
fields.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes that carry billing context
CONTEXT_FIELDS = ("customer_id", "billing_period", "utility_type", "block", "error_code")


def log_context(**fields: Any) -> dict[str, Any]:
    """Build an ``extra`` mapping from the given billing context, skipping unset values."""
    unknown = set(fields) - set(CONTEXT_FIELDS)
    if unknown:
        raise ValueError(f"Unknown log context fields: {', '.join(sorted(unknown))}")
    return {name: value for name, value in fields.items() if value is not None}


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    context = {}
    for name in CONTEXT_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            # Enums (UtilityType, ErrorCode) are logged by value
            context[name] = getattr(value, "value", value)
    return context


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for utility-billing.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = ContextFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("utility_billing").setLevel(log_level)

    # Reduce noise from external libraries
    logging.getLogger("confluent_kafka").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)


class ContextFormatter(logging.Formatter):
    """Standard formatter that appends billing context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{name}={value}" for name, value in context.items())
        return f"{line} | {pairs}"


class JsonFormatter(logging.Formatter):
    """JSON log formatter with billing context as top-level fields."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_record_context(record),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
