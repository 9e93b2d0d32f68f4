"""Logging setup for the listing photo pipeline.

Upload and gallery services log under ``listing_photos.*``; the handler is
attached to that parent logger only, so a host application's root logging
is left untouched.
"""

import logging

LOGGER_NAME = "listing_photos"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the pipeline logger and return it."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
