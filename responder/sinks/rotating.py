"""Rotating file sinks built on the standard logging package."""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from .interfaces import SINK_ROTATION_POLICIES, SinkLevel

DEFAULT_SINK_PREFIX = "responder"

_UNSAFE_FILE_PREFIX_CHARACTERS = re.compile(r"[^A-Za-z0-9._-]")

_SINK_LOGGING_LEVELS: dict[SinkLevel, int] = {
    SinkLevel.INFO: logging.INFO,
    SinkLevel.ERROR: logging.ERROR,
    SinkLevel.DEBUG: logging.DEBUG,
}


class ResponseRecordFormatter(logging.Formatter):
    """JSON line formatter for response sink records."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "data") and record.data:
            log_data["data"] = record.data
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class LoggerResponseSink:
    """Sink writing records through one instance-owned logger."""

    def __init__(self, logger: logging.Logger, level: SinkLevel):
        self._logger = logger
        self._logging_level = _SINK_LOGGING_LEVELS[level]

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def sink_write(self, record: dict[str, Any], description: str) -> None:
        """Write one structured record at the sink level.

        Args:
            record: Structured payload attached as `data`.
            description: Log message text.

        Returns:
            None: This method does not return a value.

        Raises:
            RuntimeError: Handler failures are reported by the logging package.
        """

        self._logger.log(self._logging_level, description, extra={"data": record})

    def sink_close(self) -> None:
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()


class RotatingFileSinkFactory:
    """Factory creating one time-rotated file sink per context and level.

    Loggers are constructed directly instead of through `logging.getLogger`,
    so each builder owns its handlers and two builders sharing a context tag
    never write through each other's handlers.
    """

    def __init__(self, log_path: str | os.PathLike[str]):
        self._log_path = Path(log_path)

    def sink_create(self, context: str, level: SinkLevel) -> LoggerResponseSink:
        """Create a rotating file sink for a context tag and severity level.

        Args:
            context: Builder context tag; empty tags use the default file prefix.
            level: Sink severity level selecting rotation policy.

        Returns:
            LoggerResponseSink: Sink with file handler and optional stdout mirror.

        Raises:
            OSError: Raised when the log file cannot be opened.
        """

        policy = SINK_ROTATION_POLICIES[level]
        file_prefix = sink_file_prefix(context)
        logger = logging.Logger(f"{DEFAULT_SINK_PREFIX}.{file_prefix}.{level.value}")
        logger.setLevel(_SINK_LOGGING_LEVELS[level])
        logger.propagate = False

        formatter = ResponseRecordFormatter()
        file_handler = TimedRotatingFileHandler(
            filename=str(self._log_path / f"{file_prefix}-{level.value}.log"),
            when=policy.when,
            interval=policy.interval,
            backupCount=policy.backup_count,
            encoding="utf-8",
            utc=True,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        if policy.mirror_stdout:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        return LoggerResponseSink(logger=logger, level=level)


def sink_ensure_log_directory(log_path: str | os.PathLike[str]) -> Path:
    """Create the log directory when missing and verify it is writable.

    Args:
        log_path: Directory for rotating log files.

    Returns:
        Path: Resolved log directory path.

    Raises:
        OSError: Raised when the directory cannot be created or is not writable.
    """

    directory = Path(log_path)
    directory.mkdir(parents=True, exist_ok=True)
    if not os.access(directory, os.W_OK):
        raise PermissionError(f"log directory is not writable: {directory}")
    return directory


def sink_file_prefix(context: str) -> str:
    """Derive a single-segment log file prefix from a context tag.

    Args:
        context: Builder context tag; any string is accepted.

    Returns:
        str: Prefix with characters outside `[A-Za-z0-9._-]` replaced by `_`,
        or the default prefix when the tag is empty or only dots.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    file_prefix = _UNSAFE_FILE_PREFIX_CHARACTERS.sub("_", context.strip())
    if not file_prefix.strip("."):
        return DEFAULT_SINK_PREFIX
    return file_prefix
