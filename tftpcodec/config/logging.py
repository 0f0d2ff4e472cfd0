"""Structured JSON logging for the ``tftpcodec`` logger namespace.

The package never touches the root logger. Applications that want the
codec's records as JSON call :func:`configure_logging`; everything else
goes through normal propagation.
"""

from __future__ import annotations

import msgspec
import logging
from datetime import datetime, timezone
from typing import Any, Final

LOGGER_NAME: Final[str] = "tftpcodec"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _serialise_value(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"[{bytes(value).hex(' ').upper()}]"
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """One JSON object per record, logger name relative to the package."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(f"{LOGGER_NAME}."):
            name = name[len(LOGGER_NAME) + 1 :]

        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": name,
            "message": record.getMessage(),
        }
        extras = {
            key: _serialise_value(value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return msgspec.json.encode(payload).decode("utf-8")


class _CodecHandlerMarker(logging.Filter):
    """Tags the handler installed by :func:`configure_logging`."""


def configure_logging(level: int | str = logging.INFO, handler: logging.Handler | None = None) -> logging.Handler:
    """Attach a JSON handler to the ``tftpcodec`` logger and return it.

    Calling it again replaces the handler installed previously.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if any(isinstance(f, _CodecHandlerMarker) for f in existing.filters):
            package_logger.removeHandler(existing)

    target = handler if handler is not None else logging.StreamHandler()
    target.setFormatter(StructuredLogFormatter())
    target.addFilter(_CodecHandlerMarker())
    package_logger.addHandler(target)
    package_logger.setLevel(level)
    return target


__all__ = ["LOGGER_NAME", "StructuredLogFormatter", "configure_logging"]
