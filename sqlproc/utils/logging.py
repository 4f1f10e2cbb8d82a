"""Logging helpers for sqlproc.

Library modules obtain loggers through :func:`get_logger` and only emit DEBUG
records. Records about a parsed or bound call carry the fields listed in
:data:`CALL_FIELDS` as record attributes; build them with :func:`call_fields`
and pass the result as ``extra``. :class:`StructuredFormatter` renders those
fields as top-level JSON keys.
"""

import logging
import sys
from typing import IO, Any, Final, Optional

from sqlproc._serialization import encode_json

__all__ = ("CALL_FIELDS", "ROOT_LOGGER_NAME", "StructuredFormatter", "call_fields", "configure_logging", "get_logger")

ROOT_LOGGER_NAME: Final = "sqlproc"
SIMPLE_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

CALL_FIELDS: Final = ("procedure", "return_variable", "slot_count", "parameter_count")


def call_fields(
    procedure: str,
    return_variable: Optional[str] = None,
    slot_count: Optional[int] = None,
    parameter_count: Optional[int] = None,
) -> "dict[str, Any]":
    """Record attributes describing a stored procedure call.

    Counts left as ``None`` are omitted so the formatter does not emit them.
    """
    fields: dict[str, Any] = {"procedure": procedure, "return_variable": return_variable}
    if slot_count is not None:
        fields["slot_count"] = slot_count
    if parameter_count is not None:
        fields["parameter_count"] = parameter_count
    return fields


class StructuredFormatter(logging.Formatter):
    """JSON formatter that lifts call fields to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CALL_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return encode_json(log_entry)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the ``sqlproc`` namespace.

    Args:
        name: Dotted name below ``sqlproc``; a name already starting with it is used as is.

    Returns:
        The root sqlproc logger when ``name`` is omitted, otherwise the child logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", structured: bool = True, stream: "Optional[IO[str]]" = None) -> None:
    """Install a single stream handler on the ``sqlproc`` logger.

    Replaces any handler installed by an earlier call, and stops records from
    propagating to the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines through :class:`StructuredFormatter` instead of plain text
        stream: Destination stream, ``sys.stdout`` by default
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(SIMPLE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False
