"""
Logging setup for tilecollapse.

Usage:
    from tilecollapse.logging_config import setup_logging
    setup_logging("INFO")  # call once at startup

All tilecollapse.* loggers write to stderr at the given level, and
optionally to a log file as well.
"""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "tilecollapse"


def setup_logging(level: int | str = logging.WARNING, log_file: Path | str | None = None) -> logging.Logger:
    """
    Configure the tilecollapse logger.

    Args:
        level: Level name or number for every handler
        log_file: Optional path of a file that receives the same records

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level}")
        level = resolved

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(level)

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger
