"""
Utility Module for the contact book.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Exceptions
    - Time and file helpers
"""

from .logger import setup_logger, set_level, get_logger
from .helpers import ensure_directory, generate_timestamp, utc_now

__all__ = [
    'setup_logger',
    'set_level',
    'get_logger',
    'ensure_directory',
    'generate_timestamp',
    'utc_now'
]
