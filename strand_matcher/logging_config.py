"""
Logging configuration for the strand matcher.

Provides:
- Console handler on stderr: warnings only, or everything with --verbose
- Optional file handler: captures all details with rotation (DEBUG level)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Module-level state
_logging_initialized = False


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> None:
    """
    Initialize logging for the strand_matcher package.

    Args:
        verbose: Show DEBUG messages on the console instead of WARNING and up.
        log_file: If given, also write DEBUG output to this file.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of backup files to keep.
    """
    global _logging_initialized

    if _logging_initialized:
        return

    package_logger = logging.getLogger("strand_matcher")
    package_logger.setLevel(logging.DEBUG)  # Capture everything, handlers filter

    # Console handler - stdout is reserved for the score table
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        package_logger.addHandler(file_handler)

    _logging_initialized = True


def reset_logging() -> None:
    """Reset logging state. Useful for testing."""
    global _logging_initialized
    _logging_initialized = False

    package_logger = logging.getLogger("strand_matcher")
    for handler in list(package_logger.handlers):
        handler.close()
        package_logger.removeHandler(handler)
