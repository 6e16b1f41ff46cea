"""Logging setup for the account service.

Request lines (``http_*`` fields) and upstream platform calls
(``upstream_*`` fields) attach structured data through ``extra=``. Both
formatters render those fields next to the message, after scrubbing bearer
tokens, passwords and referral codes out of keys and values alike.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import UTC, datetime
from typing import Any

REDACTED = "***REDACTED***"

# Field names whose values never reach log output
SENSITIVE_KEY = re.compile(r"password|token|authorization|referral[_-]?code", re.IGNORECASE)

# Secrets embedded in free text: headers, form echoes, referral links
_TEXT_SCRUBBERS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(Bearer\s+)[^\s\"']+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"(password[\s=:]+)\S+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"([?&]ref=)[^&#\s]+", re.IGNORECASE), r"\1" + REDACTED),
]

# Attributes every LogRecord has, plus the ones formatters and filters add
_BUILTIN_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "correlation_id",
}


def is_sensitive_key(key: str) -> bool:
    return bool(SENSITIVE_KEY.search(key))


def scrub(text: str) -> str:
    """Mask secrets that appear inside free-form text."""
    for pattern, replacement in _TEXT_SCRUBBERS:
        text = pattern.sub(replacement, text)
    return text


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """The ``extra=`` fields of a record, with secrets masked."""
    fields: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _BUILTIN_ATTRS:
            continue
        if is_sensitive_key(key):
            fields[key] = REDACTED
        elif isinstance(value, str):
            fields[key] = scrub(value)
        else:
            fields[key] = value
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per line; extra fields sit at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": scrub(record.getMessage()),
        }
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            entry["correlation_id"] = correlation_id
        entry.update(record_fields(record))

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": scrub(str(record.exc_info[1])),
            }
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line followed by ``key=value`` extra fields."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = record_fields(record)
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            fields = {"correlation_id": correlation_id, **fields}
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        return scrub(line)


class CorrelationFilter(logging.Filter):
    """Attach the current request's correlation_id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        from ringtone_account.core.context import get_correlation_id

        record.correlation_id = get_correlation_id()
        return True


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Configure application-wide logging.

    Args:
        level: Log level name, case-insensitive.
        log_format: "json" for one object per line, anything else for text.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())
    handler.addFilter(CorrelationFilter())
    root.addHandler(handler)

    # Upstream calls are logged by the platform client itself
    for name in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
