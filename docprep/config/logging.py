"""Logging setup. Structured fields passed via extra= are appended to each line as key=value."""

import logging
import sys
from typing import Any

from docprep.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Attributes every LogRecord has; anything else on a record came from extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that renders extra= fields after the message, sorted by key."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not fields:
            return line
        rendered = " ".join(f"{k}={v!r}" for k, v in sorted(fields.items()))
        return f"{line} | {rendered}"


def configure_logging() -> None:
    """Install one stdout handler on the root logger. debug=True forces DEBUG."""
    settings = get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ExtraFieldsFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Third-party loggers stay at WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("tiktoken").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_extra(extra: dict[str, Any]) -> dict[str, Any]:
    """Wrap fields for logger.info(..., **log_extra(...)); keys must not clash with LogRecord attributes."""
    return {"extra": extra}
