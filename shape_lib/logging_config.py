"""Logging setup shared by the web app and the command line.

Example usage:
    Configure at startup::

        from shape_lib.logging_config import configure_logging

        configure_logging(level='DEBUG', log_file='shapes.log')
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Sets up structured logging with consistent format across all modules.
    Call this at application startup before handling requests.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            Unknown names fall back to INFO.
        log_file: Optional path to log file. If None, logs to stderr only.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatter with timestamp, level, module, and message
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')
