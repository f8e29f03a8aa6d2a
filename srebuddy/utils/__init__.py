"""
Utility functions and helpers.

Shared logging setup used across SreBuddy.
"""

from srebuddy.utils.logging import configure_logging, get_logger, level_from_name

__all__ = [
    "configure_logging",
    "get_logger",
    "level_from_name",
]
