"""Logging setup and Logfire cloud observability initialization."""

import logging

import logfire

from dcm import __version__
from dcm.config import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the standard console format."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger().setLevel(level)


def initialize_logfire(settings: Settings) -> bool:
    """
    Initialize Logfire and bridge Python logging into it.

    Safe to call without a token: observability is optional, so a missing
    token only logs a warning.

    Args:
        settings: Application settings containing the Logfire token

    Returns:
        True if Logfire was configured.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="dcm",
            service_version=__version__,
        )

        # Bridge Python logging to Logfire
        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")
        return True

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        return False
