"""
Small value helpers shared across modules.
"""

import os
from typing import Any

_TRUTHY = {"1", "true", "yes", "y", "on"}


def is_nil(value: Any) -> bool:
    """Return True if ``value`` is None."""
    return value is None


def to_str_safe(value: Any) -> str:
    """
    Convert a value to a string without raising.

    Bytes are decoded as UTF-8 (invalid sequences replaced); None becomes ''.
    """
    if isinstance(value, str):
        return value

    if value is None:
        return ""

    try:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8", errors="replace")
        return str(value)
    except Exception:
        return ""


def is_truthy(value: Any) -> bool:
    """
    Interpret a config value as a boolean flag.

    Strings are compared case-insensitively after trimming against
    1/true/yes/y/on.
    """
    if isinstance(value, bool):
        return value
    return to_str_safe(value).strip().lower() in _TRUTHY


def is_local_dev() -> bool:
    """Return True if the LOCAL_DEVELOPMENT environment variable is truthy."""
    return is_truthy(os.environ.get("LOCAL_DEVELOPMENT"))
