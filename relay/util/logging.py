"""Logging configuration for the application."""

import logging
import sys

from relay.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Route modules log through the standard library; domain services log
    through logfire. Both end up on stdout.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Third-party loggers are noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("relay").setLevel(level)
    # Unauthorized webhook attempts are always kept
    logging.getLogger("relay.security").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
