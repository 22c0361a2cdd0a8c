"""Logging configuration for the application.

Application events go through logfire; this configures the standard library
root logger that third-party libraries (uvicorn, sqlalchemy, asyncpg) write to.
"""

import logging
import sys

import logfire

from forum.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Standard library records are forwarded to logfire as well as stdout.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "production":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout), logfire.LogfireLoggingHandler()],
        force=True,  # Override any existing configuration
    )

    # SQL statements are traced by the SQLAlchemy instrumentation instead
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("forum").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

