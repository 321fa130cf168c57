"""Clock helpers shared by the scheduler and the report generators.

All times inside the engine are plain integers counting seconds since
midnight. These helpers convert between that representation and the
"HH:MM" strings used in event files and printed schedules.
"""

import re

TIME_FORMAT_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def is_valid_time_format(value: str) -> bool:
    """Check that a string is a 24h "HH:MM" clock time."""
    return bool(TIME_FORMAT_PATTERN.match(value.strip()))


def parse_time(value: str) -> int:
    """Parse "HH:MM" into seconds since midnight.

    Examples:
        "09:30" -> 34200
        "9:05" -> 32700
    """
    if not is_valid_time_format(value):
        raise ValueError(f"Invalid time format: {value!r}. Expected HH:MM")
    hours, minutes = (int(part) for part in value.strip().split(":"))
    return hours * 3600 + minutes * 60


def format_time(seconds: int) -> str:
    """Format seconds since midnight as "HH:MM" (seconds are truncated)."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours:02d}:{minutes:02d}"


def format_duration(seconds: int | float) -> str:
    """Human readable duration.

    Examples:
        3665 -> "1h 1min 5s"
        125 -> "2min 5s"
        45 -> "45s"
    """
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    rest = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}min")
    if rest > 0 or not parts:
        parts.append(f"{rest}s")
    return " ".join(parts)


def format_duration_min_sec(seconds: int) -> str:
    """Format a duration as "M:SS" (125 -> "2:05")."""
    return f"{seconds // 60}:{seconds % 60:02d}"


def combinations(n: int) -> int:
    """Number of unordered pairs C(n, 2)."""
    if n < 2:
        return 0
    return n * (n - 1) // 2
