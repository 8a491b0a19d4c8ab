"""Logging configuration for the service."""

import logging
import sys

from taskdeck.core.config import Settings, get_settings

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging to stdout.

    Level comes from settings.log_level when set, else DEBUG in debug mode and
    INFO otherwise. SQL statement logging follows database_echo; the Redis
    client logger is held at WARNING so connection chatter stays out of the
    cache's own degradation warnings.
    """
    settings = settings or get_settings()
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
    else:
        level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
