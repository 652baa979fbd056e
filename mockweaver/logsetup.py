"""Logger construction and version helpers."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Any, Mapping

from mockweaver.stackerr import new_stack_errf

LOG_KEY_BASE_DIR = "base-dir"
LOG_KEY_DIR = "dir"
LOG_KEY_FILE = "file"
LOG_KEY_INTERFACE = "interface"
LOG_KEY_IMPORT = "import"
LOG_KEY_PATH = "path"
LOG_KEY_QUALIFIED_NAME = "qualified-name"
LOG_KEY_PACKAGE_NAME = "package-name"
LOG_KEY_PACKAGE_PATH = "package-path"

DEFAULT_SEMVER = "v0.0.0-dev"
DOCS_BASE_URL = "https://mockweaver.example.com"
LOGGER_NAME = "mockweaver"

# Version stamped in at release time; empty for development builds.
SEMVER = ""

TRACE = 5
DISABLED = logging.CRITICAL + 10

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "disabled": DISABLED,
    "": logging.NOTSET,
}

_ABBREVIATIONS = (
    (logging.CRITICAL, "FTL", "\x1b[1;31m"),
    (logging.ERROR, "ERR", "\x1b[1;31m"),
    (logging.WARNING, "WRN", "\x1b[31m"),
    (logging.INFO, "INF", "\x1b[32m"),
    (logging.DEBUG, "DBG", "\x1b[33m"),
    (TRACE, "TRC", "\x1b[35m"),
)
_RESET = "\x1b[0m"
_DIM = "\x1b[90m"


def get_semver_info() -> str:
    """Return the version of this build."""
    return SEMVER or DEFAULT_SEMVER


def minor_semver(semver: str) -> str:
    """Return ``semver`` cut down to its major and minor parts."""
    return ".".join(semver.split(".")[:2])


def get_minor_semver() -> str:
    """Return the current version up to and including the minor version."""
    return minor_semver(get_semver_info())


def docs_url(relative_path: str) -> str:
    """Return the documentation URL for ``relative_path`` at the current version."""
    if not relative_path.startswith("/"):
        relative_path = "/" + relative_path
    return f"{DOCS_BASE_URL}/{get_minor_semver()}{relative_path}"


def _format_time(created: float) -> str:
    moment = datetime.fromtimestamp(created).astimezone()
    nanos = min(int(round((created % 1) * 1_000_000_000)), 999_999_999)
    offset = moment.utcoffset()
    if not offset:
        zone = "Z"
    else:
        minutes = int(offset.total_seconds()) // 60
        sign = "+" if minutes >= 0 else "-"
        hours, mins = divmod(abs(minutes), 60)
        zone = f"{sign}{hours:02d}:{mins:02d}"
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{nanos:09d}{zone}"


class _ConsoleFormatter(logging.Formatter):
    def __init__(self, version: str, color: bool) -> None:
        super().__init__()
        self.version = version
        self.color = color

    def _level(self, levelno: int) -> str:
        for threshold, abbrev, colour in _ABBREVIATIONS:
            if levelno >= threshold:
                return f"{colour}{abbrev}{_RESET}" if self.color else abbrev
        return "???"

    def format(self, record: logging.LogRecord) -> str:
        stamp = _format_time(record.created)
        if self.color:
            stamp = f"{_DIM}{stamp}{_RESET}"
        fields: dict[str, Any] = dict(getattr(record, "fields", None) or {})
        fields["version"] = self.version
        rendered = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        line = f"{stamp} {self._level(record.levelno)} {record.getMessage()} {rendered}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(level: str) -> logging.Logger:
    """Build the console logger writing to stderr at the named level."""
    levelno = _LEVELS.get(level.lower())
    if levelno is None:
        raise new_stack_errf(
            ValueError(f"Unknown Level String: '{level}', defaulting to NoLevel"),
            "Couldn't parse log level",
        )
    stream = sys.stderr
    try:
        is_tty = stream.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    color = is_tty and os.environ.get("TERM") != "dumb"

    handler = logging.StreamHandler(stream)
    handler.setFormatter(_ConsoleFormatter(get_semver_info(), color))

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(levelno)
    logger.propagate = False
    return logger


def _log(
    logger: logging.Logger,
    levelno: int,
    prefix: str,
    message: str,
    fields: Mapping[str, Any] | None,
) -> None:
    logger.log(levelno, "%s: %s", prefix, message, extra={"fields": dict(fields or {})})


def warn(logger: logging.Logger, prefix: str, message: str, fields: Mapping[str, Any] | None) -> None:
    """Log ``prefix: message`` at warning level with optional fields."""
    _log(logger, logging.WARNING, prefix, message, fields)


def info(logger: logging.Logger, prefix: str, message: str, fields: Mapping[str, Any] | None) -> None:
    """Log ``prefix: message`` at info level with optional fields."""
    _log(logger, logging.INFO, prefix, message, fields)


def warn_deprecated(logger: logging.Logger, message: str, fields: Mapping[str, Any] | None) -> None:
    """Log a deprecation warning."""
    warn(logger, "DEPRECATION", message, fields)