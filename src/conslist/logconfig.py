import logging
import os
from typing import Optional

TRACE = 5

logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "conslist"
LEVEL_ENV_VAR = "CONSLIST_LOGGING_LEVEL"
DEV_LOGGER_ENV_VAR = "CONSLIST_USE_DEV_LOGGER"

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s.%(funcName)s] - %(message)s"

_installed_handler: Optional[logging.Handler] = None


def get_level() -> str:
    """Get the logging level named by the environment, or the default level.

    Any level name registered with :py:mod:`logging` is accepted, including
    ``TRACE`` for the per-operation degradation messages."""
    return os.getenv(LEVEL_ENV_VAR, DEFAULT_LEVEL).upper()


def use_dev_logger() -> bool:
    return os.getenv(DEV_LOGGER_ENV_VAR, "").lower() == "true"


def get_handler(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Get the handler for the conslist logger.

    Log records are discarded unless the developer logger is switched on in the
    environment, in which case they are written to stderr."""
    handler: logging.Handler = (
        logging.StreamHandler() if use_dev_logger() else logging.NullHandler()
    )
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level or get_level())
    return handler


def configure_root_logger(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Configure and return the top level conslist logger.

    Calling this more than once replaces the handler installed by the previous
    call rather than stacking another one."""
    global _installed_handler

    level = level or get_level()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)
    _installed_handler = get_handler(level=level, fmt=fmt)
    logger.addHandler(_installed_handler)
    return logger
