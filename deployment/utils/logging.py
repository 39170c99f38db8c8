import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# client modules log under their module name, below this package logger
PACKAGE_LOGGER = "deployment"


def _configure(logger: logging.Logger, level: str) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)


def setup_logger(name: str, level: str | None = None) -> logging.Logger:
    level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    _configure(logging.getLogger(PACKAGE_LOGGER), level)
    logger = logging.getLogger(name)
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        _configure(logger, level)
    return logger
