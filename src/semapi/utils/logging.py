"""Logging helpers with consistent formatting."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from rich.logging import RichHandler

from semapi.utils.env import get_bool_env


def get_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    *,
    rich: Optional[bool] = None,
) -> logging.Logger:
    """Configure and return a logger.

    ``rich`` defaults to on unless ``SEMAPI_PLAIN_LOGS`` is set, which is handy
    when shipping logs to a collector that chokes on ANSI sequences.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    if rich is None:
        rich = not get_bool_env("SEMAPI_PLAIN_LOGS")

    logger.setLevel(level)

    if rich:
        handler: logging.Handler = RichHandler(
            level=level,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=True,
            show_path=False,
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_log_level(level: Union[int, str], *names: str) -> None:
    """Adjust the level of already-configured loggers and their handlers."""
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
