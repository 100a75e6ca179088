"""Logging configuration shared by every service process."""

import logging

from vyom.config import config


def configure_logging() -> None:
    """Configure the root logger from ``LOG_LEVEL``."""

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
