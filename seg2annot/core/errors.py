# -*- coding: utf-8 -*-

"""
seg2annot Error Handling Module
Custom exceptions and error reporting shared by the loaders, the writer and the CLI.
"""

import logging
from typing import Optional, Dict, Any

from . import constants as const


class Seg2AnnotError(Exception):
    """
    Base exception for all seg2annot errors.

    Args:
        message: Human-readable error message
        error_code: Optional error code for categorization
        details: Optional dictionary with additional error details
    """

    exit_code = const.EXIT_FAILURE

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigError(Seg2AnnotError):
    """
    Raised when a required option or environment variable is missing or inconsistent.

    Args:
        message: Error message
        config_key: Option or environment variable that caused the error
        expected: Expected value or format
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if expected:
            details["expected"] = expected
        super().__init__(message, error_code="CONFIG_ERROR", details=details)


class FileIOError(Seg2AnnotError):
    """
    Raised when an input cannot be read or the output cannot be written.

    Args:
        message: Error message
        file_path: Path of the file involved
        file_type: Kind of file (e.g. 'ctab', 'segmentation', 'surface', 'annotation')
        operation: 'read' or 'write'
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        file_type: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        details = {}
        if file_path:
            details["file_path"] = str(file_path)
        if file_type:
            details["file_type"] = file_type
        if operation:
            details["operation"] = operation
        super().__init__(message, error_code="IO_ERROR", details=details)


class UsageError(Seg2AnnotError):
    """
    Raised for unrecognized command-line options.

    Args:
        message: Error message
        option: The offending option as typed
    """

    exit_code = const.EXIT_USAGE

    def __init__(self, message: str, option: Optional[str] = None):
        details = {}
        if option:
            details["option"] = option
        super().__init__(message, error_code="USAGE_ERROR", details=details)


# Error handling utilities


def handle_error(error: Exception, logger: Optional[logging.Logger] = None) -> int:
    """
    Log an error and return the process exit code it maps to.

    Args:
        error: The exception to handle
        logger: Logger instance for error logging

    Returns:
        Exit code for the error (1 for unexpected exceptions)
    """
    if logger:
        if isinstance(error, Seg2AnnotError):
            logger.error(f"ERROR: {error.message}")
            for key, value in error.details.items():
                logger.debug(f"  {key}: {value}")
        else:
            logger.error(f"Unexpected error: {error}", exc_info=True)

    if isinstance(error, Seg2AnnotError):
        return error.exit_code
    return const.EXIT_FAILURE


def validate_file_exists(file_path, file_type: str = "file") -> None:
    """
    Validate that a file exists, raise FileIOError if not.

    Args:
        file_path: Path to the file
        file_type: Type of file for error message

    Raises:
        FileIOError: If the file doesn't exist
    """
    from pathlib import Path

    if not Path(file_path).is_file():
        raise FileIOError(
            f"{file_type} not found: {file_path}",
            file_path=str(file_path),
            file_type=file_type,
            operation="read",
        )


__all__ = [
    "Seg2AnnotError",
    "ConfigError",
    "FileIOError",
    "UsageError",
    "handle_error",
    "validate_file_exists",
]
