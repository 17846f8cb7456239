"""Logging helpers for autotex.

Every module logs through ``get_logger(__name__)``, so all records land
under the ``autotex`` logger. The package never installs handlers on
import; call ``enable_logging`` to see its debug output while developing
macros.

Example:
    >>> from autotex.utils.logger import enable_logging, get_logger
    >>> enable_logging()
    >>> get_logger(__name__).debug("Defined \\\\half")
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER = "autotex"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Names outside the package get the "autotex." prefix.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'autotex.mymodule'
    """
    if not (name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}.")):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def enable_logging(level: int = logging.DEBUG, stream: TextIO | None = None) -> logging.Handler:
    """Send autotex records at ``level`` and above to a stream.

    Calling it again replaces the handler installed by the previous call
    instead of adding a second one.

    Args:
        level: Minimum level to emit
        stream: Destination (default: stderr)

    Returns:
        The installed handler
    """
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if getattr(handler, "_autotex", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    handler._autotex = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return handler


__all__ = [
    "ROOT_LOGGER",
    "enable_logging",
    "get_logger",
]
