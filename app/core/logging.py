import logging
import sys
from typing import Optional
from pythonjsonlogger.jsonlogger import JsonFormatter
from app.core.config import Settings, get_settings


# Libraries that log one INFO line per request or per job run
NOISY_LOGGERS = ("httpx", "httpcore", "apscheduler.executors.default")


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure application logging with structured JSON format.
    """
    settings = settings or get_settings()

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Remove existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)

    if settings.LOG_FORMAT == "json":
        # JSON formatter for production
        formatter = JsonFormatter(
            fmt='%(asctime)s %(name)s %(levelname)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        # Simple formatter for development
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
