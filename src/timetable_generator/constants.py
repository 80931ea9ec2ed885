"""Constants for timetable generation."""

from enum import Enum


class ConflictType(str, Enum):
    """Category tag carried by every conflict and violation."""

    INSUFFICIENT_DURATION = "INSUFFICIENT_DURATION"
    TIME_CONFLICT = "TIME_CONFLICT"
    TEACHER_CONFLICT = "TEACHER_CONFLICT"
    WORKLOAD_VIOLATION = "WORKLOAD_VIOLATION"
    ROOM_CONFLICT = "ROOM_CONFLICT"
    INVALID_SUBJECT = "INVALID_SUBJECT"
    MISSING_SUBJECT = "MISSING_SUBJECT"
    MISSING_TEACHER = "MISSING_TEACHER"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"


# Conflict type recorded for an occurrence the engine could not place
SCHEDULING_CONFLICT = "scheduling_conflict"

# Maximum sessions a single teacher may hold per week
MAX_TEACHER_SLOTS_PER_WEEK = 3

# Subject form limits
MIN_SUBJECT_DURATION = 30
MAX_SUBJECT_DURATION = 120
MIN_FREQUENCY = 1
MAX_FREQUENCY = 5
MIN_SUBJECT_NAME_LENGTH = 2
MIN_TEACHER_NAME_LENGTH = 2

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

WORKING_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# Standard 50-minute periods with a morning break (11:00-11:30)
# and a prayer break (13:10-14:00)
DEFAULT_PERIODS = [
    {"period": 1, "start": "08:30", "end": "09:20"},
    {"period": 2, "start": "09:20", "end": "10:10"},
    {"period": 3, "start": "10:10", "end": "11:00"},
    {"period": 4, "start": "11:30", "end": "12:20"},
    {"period": 5, "start": "12:20", "end": "13:10"},
    {"period": 6, "start": "14:00", "end": "14:50"},
    {"period": 7, "start": "14:50", "end": "15:40"},
    {"period": 8, "start": "15:40", "end": "16:30"},
]

BREAKS = [
    {"name": "Morning break", "start": "11:00", "end": "11:30"},
    {"name": "Prayer break", "start": "13:10", "end": "14:00"},
]


def day_index(day: str) -> int:
    """Position of a day in the week, unknown days sort last."""
    try:
        return DAYS.index(day)
    except ValueError:
        return len(DAYS)
