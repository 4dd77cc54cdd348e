"""
Helper Utilities Module.

Small, generic functions shared across the contact book.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - generate_timestamp: Generate formatted timestamps for filenames
    - utc_now: Current time as an aware UTC datetime
    - to_iso_timestamp / parse_iso_timestamp: Persisted timestamp format
    - round_half_up: Rounding used for progress percentages
"""

import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/exports")
        PosixPath('outputs/exports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Args:
        format_str: strftime format string.

    Returns:
        Formatted timestamp string.

    Example:
        >>> generate_timestamp()
        "20261019_143022"
    """
    return datetime.now().strftime(format_str)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso_timestamp(moment: datetime) -> str:
    """
    Format a datetime the way contacts are persisted.

    Millisecond precision in UTC with a trailing ``Z``.

    Example:
        >>> to_iso_timestamp(datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        "2026-01-02T03:04:05.000Z"
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_timestamp(value: str) -> datetime:
    """Parse a timestamp produced by to_iso_timestamp."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up.

    Example:
        >>> round_half_up(12.5)
        13
    """
    return int(math.floor(value + 0.5))
