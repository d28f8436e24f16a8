"""
Logging setup for seg2annot.

Progress goes to stdout as bare messages. A log file, when requested, gets
timestamped records. The file handler is attached separately from the console
so callers can validate their options before anything is written to disk.
"""

import logging
import os
import sys
from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

# ----------------------------------------------------------------------------
# Handlers for real-time output
# ----------------------------------------------------------------------------
class _FlushOnEmit:
    """Mixin: flush the stream after every record."""

    def emit(self, record):
        try:
            super().emit(record)
            self.flush()
        except Exception:
            self.handleError(record)


class FlushingStreamHandler(_FlushOnEmit, logging.StreamHandler):
    pass


class FlushingFileHandler(_FlushOnEmit, logging.FileHandler):
    pass


class HostTimestampFormatter(logging.Formatter):
    """Stamp records in the host timezone (``TZ``, default UTC)."""

    def formatTime(self, record, datefmt=None):
        try:
            tz = ZoneInfo(os.environ.get('TZ', 'UTC'))
        except Exception:
            return super().formatTime(record, datefmt)
        return datetime.fromtimestamp(record.created, tz).strftime(datefmt or "%H:%M:%S")

# ----------------------------------------------------------------------------
# Levels and formats
# ----------------------------------------------------------------------------
LOG_LEVEL_ENV = 'SEG2ANNOT_LOG_LEVEL'
CONSOLE_LOG_LEVEL = logging.INFO
CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_NAMED_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def file_log_level() -> int:
    """Level for log files, from ``SEG2ANNOT_LOG_LEVEL`` (INFO if unset or unknown)."""
    name = os.environ.get(LOG_LEVEL_ENV, 'INFO').upper()
    return getattr(logging, name) if name in _NAMED_LEVELS else logging.INFO

# ----------------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------------
def _cleanup_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


def _copy_handler(handler: logging.Handler) -> logging.Handler:
    """Fresh handler writing to the same place as 'handler', same level and formatter."""
    if isinstance(handler, logging.FileHandler):
        # Append, so a second handler never truncates the file
        new_handler = FlushingFileHandler(handler.baseFilename, mode='a')
    elif _is_console(handler):
        new_handler = FlushingStreamHandler(handler.stream)
    else:
        raise ValueError(f"Cannot copy handler of type {type(handler).__name__}")

    new_handler.setLevel(handler.level)
    if handler.formatter:
        new_handler.setFormatter(handler.formatter)
    return new_handler

# ----------------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------------
def add_file_handler(logger: logging.Logger, log_file: str, overwrite: bool = True) -> logging.Handler:
    """
    Start logging 'logger' into 'log_file' as well.

    Raises:
        OSError: if the file cannot be opened
    """
    handler = FlushingFileHandler(log_file, mode='w' if overwrite else 'a')
    handler.setLevel(file_log_level())
    handler.setFormatter(HostTimestampFormatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return handler


def get_logger(name: str,
               log_file: Optional[str] = None,
               overwrite: bool = True,
               console: bool = True) -> logging.Logger:
    """
    Return the named logger with fresh handlers and propagation disabled.

    Args:
        name:      logger name
        log_file:  also log into this file (see add_file_handler)
        overwrite: truncate 'log_file' instead of appending
        console:   log bare messages to stdout at INFO
    """
    logger = logging.getLogger(name)
    # Handlers decide what is shown
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    _cleanup_handlers(logger)

    if console:
        handler = FlushingStreamHandler(sys.stdout)
        handler.setLevel(CONSOLE_LOG_LEVEL)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(handler)

    if log_file:
        add_file_handler(logger, log_file, overwrite=overwrite)

    return logger


def set_console_level(logger: logging.Logger, level: int) -> None:
    """Change the level of the console handlers only."""
    for handler in logger.handlers:
        if _is_console(handler):
            handler.setLevel(level)


def configure_external_loggers(names: List[str], parent_logger: logging.Logger) -> None:
    """
    Send records from library loggers (e.g. ``nibabel``) to copies of the
    handlers of 'parent_logger'.
    """
    for name in names:
        ext_logger = logging.getLogger(name)
        ext_logger.setLevel(parent_logger.level)
        ext_logger.propagate = False
        _cleanup_handlers(ext_logger)
        for handler in parent_logger.handlers:
            ext_logger.addHandler(_copy_handler(handler))
