"""Logging infrastructure setup."""

import logging
import os
from pathlib import Path

_DEFAULT_LOG_FILE = "output/feedticker.log"


def setup_logger(name: str = "feedticker", log_file: str | None = None) -> logging.Logger:
    """
    Configure and return a logger that writes to a log file and to stderr.

    The file receives INFO and above. The console only shows warnings so that
    command output on stdout stays readable.

    Args:
        name (str): The name of the logger.
        log_file (str | None): Path to the log file. Defaults to the
            ``FEEDTICKER_LOG_FILE`` environment variable, then ``output/feedticker.log``.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if setup is called multiple times
    if logger.hasHandlers():
        return logger

    log_path = Path(log_file or os.getenv("FEEDTICKER_LOG_FILE", _DEFAULT_LOG_FILE))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(module)s.%(funcName)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger

# Create a default logger instance
logger = setup_logger()
