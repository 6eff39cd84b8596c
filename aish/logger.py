#!/usr/bin/env python3
"""
Logging utilities for aish.

Diagnostics for developers go through the ``aish`` logger hierarchy; messages
meant for the person at the prompt go through :class:`aish.ui.UIManager`.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import Config

ROOT_LOGGER_NAME = "aish"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)

    if not root.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
        root.propagate = False

        level = getattr(logging, Config.get_log_level(), logging.WARNING)
        root.setLevel(level)

    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the ``aish`` namespace.

    Args:
        name: Dotted module name, usually ``__name__``

    Returns:
        Configured logger
    """
    root = _configure_root()
    if not name or name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_level(level: Union[int, str]) -> None:
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    _configure_root().setLevel(level)
