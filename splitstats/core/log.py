import logging
from typing import Optional

import structlog

from splitstats.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog to emit JSON events at or above LOG_LEVEL.

    Meant to be called once by the host application at startup.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
