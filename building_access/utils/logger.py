# building_access/utils/logger.py
"""
Centralised logging configuration for the reporting service.
Console output plus an optional rotating file (LOG_DIR/LOG_FILE, default logs/reports.log).
Everything is read from Settings, so .env controls level, location and rotation.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from building_access.config import settings

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_handlers: list[logging.Handler] = []


def log_file_path() -> str:
    return os.path.join(settings.LOG_DIR or DEFAULT_LOG_DIR, settings.LOG_FILE)


def configure_logging(force: bool = False) -> Optional[str]:
    """
    Attach the service's handlers to the root logger, once.
    force=True drops the previously attached handlers and re-reads settings.
    Returns the log file path, or None when file logging is disabled.
    """
    root = logging.getLogger()
    if _handlers and not force:
        return log_file_path() if settings.LOG_TO_FILE else None
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    _handlers.append(console)

    path = None
    if settings.LOG_TO_FILE:
        path = log_file_path()
        os.makedirs(os.path.dirname(path), exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=path,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)
        _handlers.append(file_handler)

    for handler in _handlers:
        handler.setLevel(level)
        root.addHandler(handler)
    root.setLevel(level)
    return path


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    configure_logging()
    return logging.getLogger(name)
