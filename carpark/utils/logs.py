"""
Logger setup shared by the command line entry points.
"""

from __future__ import annotations

import logging

from carpark.utils.config import LOGLEVEL

__all__ = ["setup_script_logger"]


def setup_script_logger(name: str, level: str | None = None) -> logging.Logger:
    """
    Configure a basic process-wide logger and return a named logger.

    :param name: Logger name (typically the command being run).
    :param level: Level name overriding ``LOGLEVEL`` from the environment.
    :returns: Configured :class:`logging.Logger` instance.
    """
    level_name = (level or LOGLEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger(name)
