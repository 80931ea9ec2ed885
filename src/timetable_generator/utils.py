"""Time and identifier helpers."""

import re
import uuid

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def is_valid_time(value: str) -> bool:
    """Check that a value is a 24h HH:MM time string."""
    return bool(value) and TIME_PATTERN.match(value) is not None


def time_to_minutes(value: str) -> int:
    """Convert an HH:MM string to minutes since midnight.

    Args:
        value: Time string like "08:30"

    Returns:
        Minutes since midnight (e.g. 510)
    """
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def calculate_duration(start_time: str, end_time: str) -> int:
    """Length of the interval between two HH:MM times in minutes."""
    return time_to_minutes(end_time) - time_to_minutes(start_time)


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Check whether two half-open [start, end) intervals overlap.

    Intervals that only touch (one ends when the other starts) do not overlap.
    """
    return time_to_minutes(start1) < time_to_minutes(end2) and time_to_minutes(
        start2
    ) < time_to_minutes(end1)


def generate_id(prefix: str = "") -> str:
    """Generate a fresh identifier, optionally prefixed.

    Args:
        prefix: Readable prefix such as a subject id

    Returns:
        Identifier like "math-1a2b3c4d"
    """
    unique_part = uuid.uuid4().hex[:8]
    return f"{prefix}-{unique_part}" if prefix else unique_part
