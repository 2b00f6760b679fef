"""
Formatters referenced from the dictConfig built in builder.py.

JsonFormatter   one JSON document per line, for log shipping
ColorFormatter  coloured single-line output for a developer terminal
"""

import json
import logging
from logging import LogRecord
from typing import Any

from member_registry.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord carries; anything else on a record came from `extra`.
_STANDARD_ATTRS = frozenset(vars(LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def record_extras(record: LogRecord) -> dict[str, Any]:
    """The `extra={...}` fields of a record, made JSON-safe."""
    return {
        key: _jsonable(value)
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """
    Emit each record as a JSON object.

    Fixed keys: timestamp, level, logger, message, request_id, service, env,
    version, plus source location. Extras are merged in after them and never
    overwrite a fixed key.
    """

    def __init__(self, *, env: str | None = None, service: str = "member-registry", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        document: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
            "pathname": record.pathname,
            "lineno": record.lineno,
        }
        if record.exc_info:
            document["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            document["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record_extras(record).items():
            document.setdefault(key, value)

        return json.dumps(document, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE, with the level coloured."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
    }
    RESET = "\033[0m"

    def format(self, record: LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname, "")
        line = " | ".join((
            self.formatTime(record, self.datefmt),
            f"{color}{record.levelname:<8}{self.RESET}",
            f"{record.name:<30}",
            f"{getattr(record, 'request_id', '-'):<10}",
            record.getMessage(),
        ))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
