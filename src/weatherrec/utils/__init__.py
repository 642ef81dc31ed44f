"""Common utility functions and helpers for the weatherrec package."""

from weatherrec.utils.file import atomic_write_text, ensure_directory_exists
from weatherrec.utils.formatting import format_number, format_scalar, format_temperature
from weatherrec.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "atomic_write_text",
    "ensure_directory_exists",
    "format_number",
    "format_scalar",
    "format_temperature",
]
