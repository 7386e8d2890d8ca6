"""
Core Utilities.

Shared utility functions used across the collector.
"""

import os


def safe_filename(value: str) -> str:
    """
    Make a value usable as a single path component.

    Path separators are replaced with underscores so a host name can
    never escape the directory it is joined to.

    Args:
        value: Raw value, typically a host name from the command line

    Returns:
        The value with every path separator replaced by '_'
    """
    for sep in {os.sep, os.altsep or os.sep, "/"}:
        value = value.replace(sep, "_")
    return value
