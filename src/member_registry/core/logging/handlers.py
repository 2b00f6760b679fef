"""
dictConfig handler entries, one factory per handler name used in builder.py.
"""

from pathlib import Path

from member_registry.config.settings import Settings

HANDLER_FILTERS = ["request_id", "redact"]

APP_LOG_FILE = "app.log"
ERROR_LOG_FILE = "errors.log"


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def _stream(formatter: str, level: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "level": level,
        "filters": HANDLER_FILTERS,
    }


def _rotating_file(settings: Settings, filename: str, formatter: str, level: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "formatter": formatter,
        "level": level,
        "filters": HANDLER_FILTERS,
    }


def get_console_handler(settings: Settings) -> dict:
    """stderr, at LOG_LEVEL, in the LOG_FORMAT style."""
    return _stream(_formatter_name(settings), settings.LOG_LEVEL)


def get_error_console_handler(settings: Settings) -> dict:
    return _stream("json", "ERROR")


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, APP_LOG_FILE, _formatter_name(settings), settings.LOG_LEVEL)


def get_error_file_handler(settings: Settings) -> dict:
    # always JSON, whatever LOG_FORMAT says
    return _rotating_file(settings, ERROR_LOG_FILE, "json", "ERROR")
