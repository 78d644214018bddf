"""Structured JSON logging for logseqify.

Each record is written as one JSON object per line, so conversion
diagnostics can be shipped to a log pipeline without a parsing step.

Example output::

    {"ts": "2026-01-05T09:30:00.000000+00:00", "level": "WARNING",
     "logger": "logseqify.converter", "message": "Markdown conversion fell back",
     "op": "convert", "strategy": "single_block", "excerpt": "# Notes ...",
     "error_code": "PARSE_ERROR", "error_context": {"length": 812},
     "exception": "Traceback (most recent call last): ..."}

Usage::

    from logseqify.observability import get_logger

    log = get_logger("logseqify.converter")
    log.debug("converted", extra={"extra_fields": {"blocks": 3}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from logseqify.errors import LogseqifyError

DEFAULT_MAX_FIELD_CHARS = 200


class StructuredFormatter(logging.Formatter):
    """Render a :class:`logging.LogRecord` as a single-line JSON object.

    Always present: ``ts`` (UTC, ISO-8601), ``level``, ``logger`` and
    ``message``.  Fields passed as ``extra={"extra_fields": {...}}`` are
    merged at the top level, with string values longer than
    *max_field_chars* cut short so a whole Markdown document never lands
    in one log line.  When the record carries a :class:`LogseqifyError`
    its ``code`` and ``context`` are lifted into ``error_code`` and
    ``error_context`` next to the formatted ``exception``.
    """

    def __init__(self, max_field_chars: int = DEFAULT_MAX_FIELD_CHARS) -> None:
        super().__init__()
        self.max_field_chars = max_field_chars

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in (getattr(record, "extra_fields", None) or {}).items():
            payload[key] = self._clip(value)

        exc = record.exc_info[1] if record.exc_info else None
        if exc is not None:
            if isinstance(exc, LogseqifyError):
                payload.update(_error_fields(exc))
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(payload, default=str)

    def _clip(self, value: Any) -> Any:
        if not isinstance(value, str) or len(value) <= self.max_field_chars:
            return value
        dropped = len(value) - self.max_field_chars
        return f"{value[:self.max_field_chars]}...(+{dropped} chars)"


def _error_fields(exc: LogseqifyError) -> dict[str, Any]:
    code = exc.code.value if isinstance(exc.code, Enum) else str(exc.code)
    fields: dict[str, Any] = {"error_code": code}
    if exc.context:
        fields["error_context"] = exc.context
    return fields


_configured_loggers: set[str] = set()


def get_logger(
    name: str = "logseqify",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Return a logger that writes :class:`StructuredFormatter` output.

    Parameters
    ----------
    name:
        Logger name, ``"logseqify"`` by default.  Pipeline modules use
        children such as ``"logseqify.converter"``.
    level:
        Level set on first configuration, as an ``int`` or a
        case-insensitive name such as ``"DEBUG"``.  Defaults to
        ``WARNING`` so fallbacks are visible while per-conversion debug
        records stay quiet.
    stream:
        Handler output stream, ``sys.stderr`` by default.

    Returns
    -------
    logging.Logger
        The configured logger.  Later calls with the same *name* return it
        unchanged, without stacking a second handler.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    _attach_handler(logger, stream or sys.stderr)
    _configured_loggers.add(name)
    return logger


def _attach_handler(logger: logging.Logger, stream: Any) -> None:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    # Records stop here; they never reach handlers on the root logger
    logger.propagate = False
