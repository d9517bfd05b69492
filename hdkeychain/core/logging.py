"""
File for logging

All hdkeychain loggers are children of the "hdkeychain" logger. Handlers are attached once to that parent, so module
loggers created with get_logger(__name__) share one stdout handler, any file handlers and one level.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

__all__ = ["get_logger", "set_log_level", "PACKAGE_LOGGER"]

PACKAGE_LOGGER = "hdkeychain"
DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'


def _configure_package_logger(log_level: str, format_string: Optional[str]):
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    # Prevent adding duplicate handlers
    if package_logger.handlers:
        return package_logger

    package_logger.setLevel(getattr(logging, log_level.upper()))
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(stream=sys.stdout)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    return package_logger


def _attach_file_handler(package_logger: logging.Logger, log_file: Path, format_string: Optional[str]):
    """
    Adds a file handler for log_file unless one already writes there
    """
    target = os.path.abspath(log_file)
    for handler in package_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(file_handler)


def get_logger(name: str, log_level: Optional[str] = None, log_file: Optional[Path] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger with the specified configuration.

    Args:
        name: Logger name (typically __name__ from calling module)
        log_level: Optional level for this logger only (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file; a file handler is added to the package logger once per file
        format_string: Optional custom format string for handlers created by this call

    Returns:
        Configured logger instance
    """
    package_logger = _configure_package_logger(DEFAULT_LEVEL, format_string)
    if log_file:
        _attach_file_handler(package_logger, Path(log_file), format_string)

    logger = logging.getLogger(name)
    if log_level is not None:
        logger.setLevel(getattr(logging, log_level.upper()))
    return logger


def set_log_level(log_level: str) -> None:
    """
    Sets the level for every hdkeychain logger at once
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, log_level.upper()))
