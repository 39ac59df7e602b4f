"""
Terminal width detection for waymark display.
"""

import os
import sys
import logging
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_WIDTH = 80


def _columns_from_env() -> Optional[int]:
    value = os.environ.get('COLUMNS')
    if not value:
        return None
    try:
        parsed = int(value.strip())
    except ValueError:
        logger.debug(f"Ignoring non-numeric COLUMNS value: {value!r}")
        return None
    return parsed if parsed > 0 else None


def _columns_from_terminal() -> Optional[int]:
    try:
        columns = os.get_terminal_size(sys.stdout.fileno()).columns
    except (AttributeError, ValueError, OSError):
        # stdout replaced, closed or not attached to a terminal
        return None
    return columns if columns > 0 else None


def get_terminal_width(width: Optional[int] = None) -> int:
    """
    Get the terminal width to wrap against.

    Precedence: explicit width, then the COLUMNS environment variable when it
    parses to a positive integer, then the live terminal size, then 80.

    Args:
        width: Explicit width, used as-is when given

    Returns:
        Terminal width in columns
    """
    if width is not None:
        return width

    return _columns_from_env() or _columns_from_terminal() or DEFAULT_TERMINAL_WIDTH
