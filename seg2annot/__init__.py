# -*- coding: utf-8 -*-

"""
seg2annot

Convert a volume-encoded surface segmentation into a FreeSurfer annotation.
"""

__version__ = "1.1.0"
__author__ = "seg2annot Team"

# Logging utilities
from . import logger as log

from .logger import (
    add_file_handler,
    FlushingFileHandler,
    FlushingStreamHandler,
    HostTimestampFormatter,
    configure_external_loggers,
    get_logger,
    set_console_level,
)

__all__ = [
    "log",
    "add_file_handler",
    "FlushingFileHandler",
    "FlushingStreamHandler",
    "HostTimestampFormatter",
    "configure_external_loggers",
    "get_logger",
    "set_console_level",
]
