"""Logging setup for TaskZenith processes."""

import logging
from typing import Union

LOGGER_NAME = "taskzenith"


def setup_logging(log_level: Union[str, int] = logging.INFO) -> logging.Logger:
    """Attach a single console handler to the ``taskzenith`` logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
