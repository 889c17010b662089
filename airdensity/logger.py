"""Logging for the airdensity package.

A pre-configured ``logger`` writes warnings and errors to the console.  The
calculator's audit trail is an append-only file enabled with
``enable_file_logging``; every engine state transition (validation
rejection, cache hit or miss, successful evaluation, cache invalidation)
lands there as one ``YYYY-MM-DD HH:MM:SS - message`` line.

Examples:
    ```python
    from airdensity.logger import logger, enable_file_logging

    enable_file_logging("airdensity_app.log")
    logger.info("Application initialized.")
    ```
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
           'LOG_FILE_NAME',
)

LOG_FILE_NAME = "airdensity_app.log"

formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
console_handler.setLevel(logging.WARNING)

logger: logging.Logger = logging.getLogger('airdensity')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = LOG_FILE_NAME) -> None:
    """Append every event at DEBUG level and above to ``filename``.

    An already enabled audit file is closed and replaced.
    """
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(file_handler)
    if logger.level > logging.DEBUG:
        logger.setLevel(logging.DEBUG)


def disable_file_logging() -> None:
    """Detach and close the audit file.  Safe to call when none is enabled."""
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
        logger.setLevel(logging.INFO)
