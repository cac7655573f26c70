"""
Logger configuration.

Provides configured stdout logging with ISO timestamps.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "openai", "pinecone", "googleapiclient")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
