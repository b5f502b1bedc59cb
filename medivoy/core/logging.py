"""Logging setup."""

import logging

from medivoy.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the process.

    Args:
        level: Log level name; defaults to ``settings.log_level``
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).debug("Logging configured")
