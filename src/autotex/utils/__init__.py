"""Utility modules for autotex.

Provides:
- logger: get_logger and enable_logging
"""

from autotex.utils.logger import enable_logging, get_logger

__all__ = [
    "enable_logging",
    "get_logger",
]
