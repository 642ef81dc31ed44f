"""Text and number formatting utilities."""

from __future__ import annotations

from typing import Any


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` for integral values.

    Args:
        value: Number to format

    Returns:
        Formatted number string (``14.0`` -> ``"14"``, ``12.3`` -> ``"12.3"``)
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_scalar(value: Any) -> str:
    """Format a scalar record field for text exports.

    Args:
        value: Field value (None renders as an empty string)

    Returns:
        String form of the value
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def format_temperature(temp: float | None, missing: str = "N/A") -> str:
    """Format an optional temperature value.

    Args:
        temp: Temperature value
        missing: Text used when no temperature was recorded

    Returns:
        Formatted temperature string
    """
    if temp is None:
        return missing
    return format_number(temp)
