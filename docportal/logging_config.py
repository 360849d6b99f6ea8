"""Logging setup."""

import logging
import sys

from docportal.config import settings


def setup_logging() -> None:
    """Configure the root logger from LOG_LEVEL."""
    level = getattr(logging, settings.log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )
    if level != getattr(logging, settings.log_level.upper(), None):
        logging.getLogger(__name__).warning(f"Invalid LOG_LEVEL '{settings.log_level}', defaulting to INFO")

    # Quiet chatty libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
