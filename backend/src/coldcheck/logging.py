"""Structured logging for coldcheck.

Production runs emit one JSON object per line; development runs use a
readable single-line format. Both carry the ``extra`` fields passed by the
event helpers at the bottom of this module (report ids, dates, counts).
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import get_settings

# Attributes present on every LogRecord; anything else came in via ``extra``.
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "httpcore")


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, extras flattened into the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        log_data.update(_extra_fields(record))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """``time | level | logger | message`` with an event tag when present."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        event = getattr(record, "event", None)
        return f"{line} [{event}]" if event else line


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Level and format default to the ``LOG_LEVEL`` and ``LOG_FORMAT``
    settings; the CLI passes its own values.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    fmt = log_format or settings.log_format

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    get_logger(__name__).debug(
        "Logging configured",
        extra={"environment": settings.environment, "log_format": fmt},
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Adapter that merges bound context into each record's extras."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_context_logger(name: str, **context: Any) -> LoggerAdapter:
    """Logger that adds ``context`` to every message.

    Usage:
        logger = get_context_logger(__name__, submitted_by="user-1")
        logger.info("Submitting report")
    """
    return LoggerAdapter(get_logger(name), context)


# =========================
# =========================
# Convenience functions
# =========================


def log_report_submitted(
    report_id: str,
    report_date: str,
    time_slot: str,
    entry_count: int,
    attention_count: int,
    submitted_by: str,
) -> None:
    """Log a persisted compliance report."""
    logger = get_logger("coldcheck.reports")
    logger.info(
        f"Report {report_id} submitted for {report_date} {time_slot}",
        extra={
            "report_id": report_id,
            "report_date": report_date,
            "time_slot": time_slot,
            "entry_count": entry_count,
            "attention_count": attention_count,
            "submitted_by": submitted_by,
            "event": "report_submitted",
        },
    )


def log_report_deleted(report_id: str) -> None:
    """Log a report deletion."""
    logger = get_logger("coldcheck.reports")
    logger.info(
        f"Report {report_id} deleted",
        extra={"report_id": report_id, "event": "report_deleted"},
    )


def log_range_query(
    start_date: str,
    end_date: str,
    report_count: int,
    failed_days: int,
    duration_ms: float,
) -> None:
    """Log the completion of a date-range query.

    Args:
        start_date: First day of the range (inclusive)
        end_date: Last day of the range (inclusive)
        report_count: Reports returned across successful days
        failed_days: Number of days that could not be fetched
        duration_ms: Query duration in milliseconds
    """
    logger = get_logger("coldcheck.reports")
    level = logging.INFO if failed_days == 0 else logging.WARNING
    logger.log(
        level,
        f"Range query {start_date}..{end_date}: {report_count} reports",
        extra={
            "start_date": start_date,
            "end_date": end_date,
            "report_count": report_count,
            "failed_days": failed_days,
            "duration_ms": duration_ms,
            "event": "range_query",
        },
    )


def log_range_day_failure(report_date: str, error: str) -> None:
    """Log a single day that failed inside a range query."""
    logger = get_logger("coldcheck.reports")
    logger.warning(
        f"Failed to load reports for {report_date}: {error}",
        extra={
            "report_date": report_date,
            "error": error,
            "event": "range_day_failure",
        },
    )


def log_hierarchy_change(
    action: str,
    entity_type: str,
    entity_id: str,
    section_id: str | None = None,
) -> None:
    """Log an administrative change to the section hierarchy.

    Args:
        action: Action taken (created, renamed, updated, deleted)
        entity_type: section, unit or contact
        entity_id: Identifier of the changed entity
        section_id: Parent section, for units and contacts
    """
    logger = get_logger("coldcheck.hierarchy")
    logger.info(
        f"{entity_type.capitalize()} {entity_id} {action}",
        extra={
            "action": action,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "section_id": section_id,
            "event": "hierarchy_change",
        },
    )


def log_api_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    request_id: str | None = None,
) -> None:
    """Log a handled HTTP request."""
    logger = get_logger("coldcheck.api")
    logger.info(
        f"{method} {path} - {status_code}",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "request_id": request_id,
            "event": "api_request",
        },
    )
