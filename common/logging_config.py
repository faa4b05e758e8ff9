"""
Logging configuration for the parameter advisors.

Provides:
- Console logging to stderr (warnings such as the -l reset notice land there)
- Optional size-rotated log file
- Idempotent setup: re-running replaces only the handlers installed here

Version: 1.0.0
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

# Default configuration
DEFAULT_CONSOLE_FORMAT = "%(levelname)s - %(message)s"
DEFAULT_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

# Marks handlers owned by setup_logging
_HANDLER_TAG = "_advisor_handler"


def _tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(
    log_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    enable_console: bool = True,
    console_format: str = DEFAULT_CONSOLE_FORMAT,
) -> logging.Logger:
    """
    Configure root logging for a CLI run.

    Args:
        log_level: Logging level (default WARNING, so only notices reach stderr)
        log_file: Path to a rotating log file (None = console only)
        max_bytes: Maximum log file size before rotation (default 10MB)
        backup_count: Number of backup files to keep (default 5)
        enable_console: Enable stderr output (default True)
        console_format: Format string for the console handler

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Drop handlers from a previous setup, keep anyone else's
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if enable_console:
        console_handler = _tag(logging.StreamHandler(sys.stderr))
        console_handler.setFormatter(logging.Formatter(console_format))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = _tag(
            RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
        file_handler.setFormatter(logging.Formatter(DEFAULT_FILE_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    return root_logger


__all__ = [
    "setup_logging",
    "DEFAULT_CONSOLE_FORMAT",
    "DEFAULT_FILE_FORMAT",
    "DEFAULT_MAX_BYTES",
    "DEFAULT_BACKUP_COUNT",
]
