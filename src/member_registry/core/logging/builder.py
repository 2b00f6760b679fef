"""
Turn Settings into a logging.config.dictConfig mapping and install it.

Where records go:

| LOG_TO_STDOUT | LOG_DIR | handlers                              |
| ------------- | ------- | ------------------------------------- |
| true          | any     | console, error_console                |
| false         | unset   | console, error_console                |
| false         | set     | console, file (app.log), error_file   |
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from member_registry.config.settings import Settings
from member_registry.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return not settings.LOG_TO_STDOUT and bool(settings.LOG_DIR)


def _formatters(settings: Settings) -> dict:
    return {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": TEXT_FORMAT,
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default="member-registry"),
        },
    }


def _handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _loggers(settings: Settings, handler_names: list[str]) -> dict[str, dict]:
    return {
        "": {"handlers": handler_names, "level": settings.LOG_LEVEL},
        "uvicorn.error": {
            "handlers": handler_names,
            "level": settings.LOG_LEVEL,
            "propagate": False,
        },
        "uvicorn.access": {"handlers": ["console"], "level": "INFO", "propagate": False},
        # statement logging echoes member data; opt-in only
        "sqlalchemy.engine": {
            "handlers": ["console"],
            "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
            "propagate": False,
        },
    }


def make_dict_config(settings: Settings) -> dict:
    handlers = _handlers(settings)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": _formatters(settings),
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": _loggers(settings, list(handlers)),
    }


def setup_logging(settings: Settings) -> None:
    """
    Install logging for the process. Safe to call again; the later call wins.

    Creates LOG_DIR first when file handlers are in use, and puts a
    RequestIdFilter on the root logger as well so records formatted by
    handlers added outside dictConfig still carry `request_id`.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
