"""Utility functions for timetable generation."""

from collections import defaultdict
from collections.abc import Callable

from ..constants import DEFAULT_PERIODS, WORKING_DAYS
from ..models import Subject, TimeSlot
from .conflicts import ConflictTracker

# (subject, all time slots, teacher loads, tracker) -> sort key
PriorityKey = Callable[[Subject, list[TimeSlot], dict[str, int], ConflictTracker], tuple]


def generate_default_time_slots() -> list[TimeSlot]:
    """Build the default week: 8 fifty-minute periods on each working day.

    Returns:
        Time slots with ids like "monday-1" ... "friday-8"
    """
    slots = []
    for day in WORKING_DAYS:
        for period in DEFAULT_PERIODS:
            slots.append(
                TimeSlot(
                    id=f"{day.lower()}-{period['period']}",
                    day=day,
                    start_time=period["start"],
                    end_time=period["end"],
                )
            )
    return slots


def get_compatible_slots(subject: Subject, time_slots: list[TimeSlot]) -> list[TimeSlot]:
    """Candidate slots for a subject.

    Filters by the subject's preferred slots (if any), then by duration.
    Slots with malformed times are never candidates.

    Args:
        subject: Subject to place
        time_slots: All configured time slots

    Returns:
        Slots in configuration order
    """
    slots = list(time_slots)

    if subject.preferred_time_slots:
        preferred = set(subject.preferred_time_slots)
        slots = [slot for slot in slots if slot.id in preferred]

    return [
        slot for slot in slots if slot.is_well_formed and slot.duration >= subject.duration
    ]


def calculate_teacher_loads(subjects: list[Subject]) -> dict[str, int]:
    """Declared weekly sessions per teacher across all subjects."""
    loads: dict[str, int] = defaultdict(int)
    for subject in subjects:
        if subject.teacher:
            loads[subject.teacher] += subject.frequency
    return dict(loads)


def order_slots_by_day_distribution(
    slots: list[TimeSlot], used_days: set[str]
) -> list[TimeSlot]:
    """Put slots on days the teacher does not teach yet first.

    Stable partition: relative order inside each group is unchanged.

    Args:
        slots: Candidate slots
        used_days: Days the teacher already has entries on

    Returns:
        Reordered slots
    """
    fresh = [slot for slot in slots if slot.day not in used_days]
    used = [slot for slot in slots if slot.day in used_days]
    return fresh + used


def default_priority_key(
    subject: Subject,
    time_slots: list[TimeSlot],
    teacher_loads: dict[str, int],
    tracker: ConflictTracker,
) -> tuple:
    """Composite sort key, smaller sorts first.

    1. Days the teacher already uses (ascending)
    2. Declared weekly load of the teacher (ascending)
    3. Compatible slots on days the teacher has not used (descending)
    4. Compatible slots overall (ascending) - constrained subjects first
    5. Frequency (descending)
    """
    compatible = get_compatible_slots(subject, time_slots)
    used_days = tracker.get_teacher_days(subject.teacher)
    slots_on_new_days = sum(1 for slot in compatible if slot.day not in used_days)

    return (
        len(used_days),
        teacher_loads.get(subject.teacher, 0),
        -slots_on_new_days,
        len(compatible),
        -subject.frequency,
    )


def sort_subjects_by_priority(
    subjects: list[Subject],
    time_slots: list[TimeSlot],
    tracker: ConflictTracker,
    priority_key: PriorityKey = default_priority_key,
) -> list[Subject]:
    """Sort subjects by scheduling priority.

    The key is evaluated once per subject against the tracker's current
    state; priorities are not re-evaluated as entries get committed.

    Args:
        subjects: Subjects to order
        time_slots: All configured time slots
        tracker: Conflict tracker for the current run
        priority_key: Sort key function

    Returns:
        Sorted list with highest priority first
    """
    teacher_loads = calculate_teacher_loads(subjects)
    return sorted(
        subjects,
        key=lambda s: priority_key(s, time_slots, teacher_loads, tracker),
    )
