"""
Logging for the proxy. One "mentor" logger writes to a rotating file and,
optionally, to a colored console; every record carries the request id of the
HTTP call it belongs to. Library loggers (mentor.client.*, mentor.session.*)
propagate into it.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
import time
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

LOGGER_NAME = "mentor"
LOG_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s "
    "pid=%(process)d request_id=%(request_id)s src=%(filename)s:%(lineno)d "
    "%(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 10

REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 (shadow built-in name)
        record.request_id = REQUEST_ID.get()
        return True


class ColorFormatter(logging.Formatter):
    """ANSI console formatter; falls back to plain text when color is off."""

    RESET = "\x1b[0m"
    TIME = "\x1b[34m"
    MUTED = "\x1b[2m"
    PALETTE = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[35m",
    }

    def __init__(self, fmt: str, datefmt: str, *, enable_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.enable_color = enable_color

    def _paint(self, color: str, text: object) -> str:
        return f"{color}{text}{self.RESET}"

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        stamp = super().formatTime(record, datefmt)
        return self._paint(self.TIME, stamp) if self.enable_color else stamp

    def format(self, record: logging.LogRecord) -> str:
        if not self.enable_color:
            return super().format(record)
        painted = copy.copy(record)
        painted.levelname = self._paint(self.PALETTE.get(record.levelname, "\x1b[37m"), record.levelname)
        painted.name = self._paint(self.MUTED, record.name)
        painted.request_id = self._paint(self.MUTED, getattr(record, "request_id", "-"))
        return super().format(painted)


def _wants_color(stream: TextIO) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream.
        return False


def _level(name: Optional[str]) -> int:
    return logging.getLevelNamesMapping().get((name or "INFO").upper(), logging.INFO)


def _file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(str(path), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColorFormatter(LOG_FORMAT, DATE_FORMAT, enable_color=_wants_color(sys.stdout)))
    return handler


def configure_logging(
    *,
    log_dir: Optional[str | Path] = None,
    log_file: str = "mentor.log",
    level: Optional[str] = None,
    console: Optional[bool] = None,
) -> logging.Logger:
    """
    Set up the "mentor" logger once and return it. Arguments left as None are
    read from Settings (LOG_DIR, LOG_LEVEL, LOG_CONSOLE).
    """
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_configured", False):
        return logger

    from api.config import get_settings

    settings = get_settings()
    numeric_level = _level(level or settings.log_level)
    handlers = [_file_handler(Path(log_dir or settings.log_dir) / log_file, numeric_level)]
    if settings.log_console if console is None else console:
        handlers.append(_console_handler(numeric_level))

    request_filter = RequestIdFilter()
    for handler in handlers:
        handler.addFilter(request_filter)
        logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False
    logger._configured = True  # type: ignore[attr-defined]
    return logger


def set_request_id(request_id: Optional[str] = None) -> str:
    rid = request_id or uuid.uuid4().hex
    REQUEST_ID.set(rid)
    return rid


def clear_request_id() -> None:
    REQUEST_ID.set("-")


class log_request:
    """
    Time a gateway call and log its outcome:
        with log_request(logger, "gateway quiz"):
            ...
    Failures are logged as warnings; the exception still propagates.
    """

    def __init__(self, logger: logging.Logger, name: str):
        self.logger = logger
        self.name = name
        self._started = 0.0

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._started) * 1000)

    def __enter__(self) -> "log_request":
        self._started = time.perf_counter()
        self.logger.debug("%s started", self.name)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None:
            self.logger.info("%s ok duration_ms=%s", self.name, self.elapsed_ms)
        else:
            self.logger.warning("%s failed duration_ms=%s error=%r", self.name, self.elapsed_ms, exc)
        return False
