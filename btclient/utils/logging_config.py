"""Logging configuration for btclient.

Logging is process-wide state: it is configured once, after the command line
has been parsed and before the run starts, and not touched afterwards.
"""

from __future__ import annotations

import logging
import logging.config
import os
from typing import Any

from btclient.models import LogLevel
from btclient.utils.rich_logging import PLAIN_FORMAT, create_rich_handler

LOG_FILE_ENV = "BTCLIENT_LOG_FILE"


def setup_logging(level: LogLevel = LogLevel.INFO, log_file: str | None = None) -> None:
    """Set up console (Rich) and optional file logging.

    Args:
        level: Minimum level for the btclient logger and the root logger
        log_file: Optional plain-text log file; defaults to $BTCLIENT_LOG_FILE

    """
    if log_file is None:
        log_file = os.environ.get(LOG_FILE_ENV) or None

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": PLAIN_FORMAT,
            },
        },
        "handlers": {},
        "loggers": {
            "btclient": {
                "level": level.value,
                "handlers": [],
                "propagate": False,
            },
        },
        "root": {
            "level": level.value,
            "handlers": [],
        },
    }

    if log_file:
        logging_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level.value,
            "formatter": "simple",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
        }
        logging_config["loggers"]["btclient"]["handlers"].append("file")
        logging_config["root"]["handlers"].append("file")

    logging.config.dictConfig(logging_config)

    # dictConfig cannot build a handler around an existing Console object
    console_handler = create_rich_handler(level=getattr(logging, level.value))
    logging.getLogger("btclient").addHandler(console_handler)
    logging.getLogger().addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, exc: BaseException, context: str = "") -> None:
    """Log an exception with its traceback and optional context prefix."""
    message = str(exc) or exc.__class__.__name__
    if context:
        logger.error("%s: %s", context, message, exc_info=exc)
    else:
        logger.error("%s", message, exc_info=exc)
