"""Shared helpers for the fight scheduler packages."""
from .time_utils import (
    combinations,
    format_duration,
    format_duration_min_sec,
    format_time,
    is_valid_time_format,
    parse_time,
)

__all__ = [
    "combinations",
    "format_duration",
    "format_duration_min_sec",
    "format_time",
    "is_valid_time_format",
    "parse_time",
]
