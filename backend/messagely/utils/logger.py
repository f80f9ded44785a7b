# messagely/utils/logger.py

import logging
import sys

from messagely.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(level: str = LOG_LEVEL) -> logging.Logger:
    """Configure the root "messagely" logger once; repeated calls only reset the level."""
    logger = logging.getLogger("messagely")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
