"""
File logging for PageQuill runs.

The console side is handled by ``rich_logger``; this module adds a
rotating log file next to it so a long editing or batch session can be
inspected afterwards.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _validate_level(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def get_logger(name: str) -> logging.Logger:
    """Return the named logger; the name must be non-empty."""
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def add_file_handler(logger: logging.Logger, file_path: str, level: str = "INFO",
                     max_file_size: int = 5 * 1024 * 1024,
                     backup_count: int = 3) -> RotatingFileHandler:
    """
    Attach a rotating log file to ``logger``.

    Missing parent directories are created. If the logger's own level
    would filter out records at ``level``, it is lowered to ``level`` so
    they reach the file; other handlers keep their own thresholds.

    Args:
        logger: Logger that receives the handler (usually the root logger)
        file_path: Path of the log file
        level: Lowest level written to the file
        max_file_size: Size in bytes at which the file rotates
        backup_count: Rotated files kept

    Returns:
        The attached handler
    """
    if not isinstance(logger, logging.Logger):
        raise ValueError("Logger must be a logging.Logger instance")
    if not file_path or not isinstance(file_path, str):
        raise ValueError("File path must be a non-empty string")
    numeric_level = _validate_level(level)

    log_dir = os.path.dirname(file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        file_path, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    logger.addHandler(file_handler)

    if logger.getEffectiveLevel() > numeric_level:
        logger.setLevel(numeric_level)
    return file_handler
