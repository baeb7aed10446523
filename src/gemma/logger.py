import logging

from gemma import config

default_level = config.LOGGING_LEVEL

logging.basicConfig(
    level=getattr(logging, default_level, logging.WARNING),
    format="%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("gemma")

# Shortcut aliases
debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_logger():
    return logger


def set_logging_level(level: str) -> bool:
    normalized_level = level.upper()
    if normalized_level not in VALID_LEVELS:
        logger.warning("Invalid logging level: %s. Level not changed.", level)
        return False
    new_level = getattr(logging, normalized_level)
    logging.getLogger().setLevel(new_level)
    logger.setLevel(new_level)
    logger.debug("Logging level changed to: %s", normalized_level)
    return True
