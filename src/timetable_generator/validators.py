"""Validation logic for timetable configurations."""

import logging
from collections import defaultdict

from .constants import (
    MAX_FREQUENCY,
    MAX_SUBJECT_DURATION,
    MAX_TEACHER_SLOTS_PER_WEEK,
    MIN_FREQUENCY,
    MIN_SUBJECT_DURATION,
    MIN_SUBJECT_NAME_LENGTH,
    MIN_TEACHER_NAME_LENGTH,
    WORKING_DAYS,
)
from .models import Subject, TimeSlot, TimetableConfig, ValidationResult
from .utils import is_valid_time, time_to_minutes

logger = logging.getLogger(__name__)


def validate_configuration(config: TimetableConfig) -> ValidationResult:
    """Check that a configuration can be handed to the generator.

    Errors block generation, warnings do not. Every rule runs, except that
    an empty subject list or an empty slot list returns immediately.

    Args:
        config: Subjects and time slots

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    if not config.subjects:
        result.errors.append("No subjects configured. Add at least one subject.")
        return result

    if not config.time_slots:
        result.errors.append("No time slots configured. Add at least one time slot.")
        return result

    # Slot times
    for slot in config.time_slots:
        for error in _time_range_errors(slot):
            result.errors.append(f'Time slot "{slot.id}": {error}')

    # Teacher assignment
    for subject in config.subjects:
        if not subject.teacher or not subject.teacher.strip():
            result.errors.append(f'Subject "{subject.name}" has no teacher assigned')

    # Teacher workload
    teacher_loads: dict[str, int] = defaultdict(int)
    for subject in config.subjects:
        if subject.teacher:
            teacher_loads[subject.teacher] += subject.frequency

    for teacher, total in teacher_loads.items():
        if total > MAX_TEACHER_SLOTS_PER_WEEK:
            result.errors.append(
                f"Teacher {teacher} has {total} sessions/week, which would exceed "
                f"{MAX_TEACHER_SLOTS_PER_WEEK} slots/week limit"
            )
        elif total == MAX_TEACHER_SLOTS_PER_WEEK:
            result.warnings.append(
                f"Teacher {teacher} is at the {MAX_TEACHER_SLOTS_PER_WEEK} slots/week "
                "limit (no room for additional sessions)"
            )

    # Duration fit
    longest = max(slot.duration for slot in config.time_slots)
    for subject in config.subjects:
        if not any(slot.duration >= subject.duration for slot in config.time_slots):
            result.errors.append(
                f'Subject "{subject.name}" requires {subject.duration}min but the longest '
                f"time slot is {longest}min"
            )

    # Day spread
    for subject in config.subjects:
        days = {slot.day for slot in config.time_slots if slot.duration >= subject.duration}
        if subject.frequency > len(days):
            result.warnings.append(
                f'Subject "{subject.name}" needs {subject.frequency} sessions/week but only '
                f"{len(days)} days have suitable slots; sessions may share a day"
            )

    # Room capacity
    room_subjects: dict[str, list[Subject]] = defaultdict(list)
    for subject in config.subjects:
        if subject.room:
            room_subjects[subject.room].append(subject)

    reference_day = config.time_slots[0].day
    slots_per_day = sum(1 for slot in config.time_slots if slot.day == reference_day)
    day_count = len({slot.day for slot in config.time_slots})
    capacity = slots_per_day * day_count

    for room, subjects in room_subjects.items():
        if len(subjects) < 2:
            continue
        demand = sum(s.frequency for s in subjects)
        if demand > capacity:
            result.warnings.append(
                f"Room {room} is requested for {demand} sessions/week but only "
                f"{capacity} slots are available; room conflicts are likely"
            )

    logger.info(
        f"Configuration validated: {len(result.errors)} errors, "
        f"{len(result.warnings)} warnings"
    )
    return result


def validate_subject(subject: Subject, existing_subjects: list[Subject]) -> list[str]:
    """Validate a subject before adding it to a configuration.

    Args:
        subject: Subject being added
        existing_subjects: Subjects already configured

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    name = (subject.name or "").strip()
    if not name:
        errors.append("Subject name is required")
    elif len(name) < MIN_SUBJECT_NAME_LENGTH:
        errors.append(f"Subject name must be at least {MIN_SUBJECT_NAME_LENGTH} characters")
    elif any(
        s.name.strip().lower() == name.lower() and s.id != subject.id for s in existing_subjects
    ):
        errors.append("Subject name already exists")

    teacher = (subject.teacher or "").strip()
    if not teacher:
        errors.append("Teacher name is required")
    elif len(teacher) < MIN_TEACHER_NAME_LENGTH:
        errors.append(
            f"Teacher name must be at least {MIN_TEACHER_NAME_LENGTH} characters long"
        )

    if subject.duration < MIN_SUBJECT_DURATION:
        errors.append(f"Duration must be at least {MIN_SUBJECT_DURATION} minutes")
    elif subject.duration > MAX_SUBJECT_DURATION:
        errors.append(f"Duration cannot exceed {MAX_SUBJECT_DURATION} minutes")

    if subject.frequency < MIN_FREQUENCY:
        errors.append(f"Frequency must be at least {MIN_FREQUENCY} time per week")
    elif subject.frequency > MAX_FREQUENCY:
        errors.append(f"Frequency cannot exceed {MAX_FREQUENCY} times per week")

    if teacher:
        existing_load = sum(
            s.frequency
            for s in existing_subjects
            if s.teacher.lower() == teacher.lower() and s.id != subject.id
        )
        if existing_load + subject.frequency > MAX_TEACHER_SLOTS_PER_WEEK:
            errors.append(
                f'Teacher "{teacher}" would exceed {MAX_TEACHER_SLOTS_PER_WEEK} slots/week '
                f"limit (currently has {existing_load}, adding {subject.frequency})"
            )

    return errors


def validate_time_slot(slot: TimeSlot, existing_slots: list[TimeSlot]) -> list[str]:
    """Validate a time slot before adding it to a configuration.

    Args:
        slot: Time slot being added
        existing_slots: Slots already configured

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    if slot.day not in WORKING_DAYS:
        errors.append(f"Invalid day: '{slot.day}'. Expected: {', '.join(WORKING_DAYS)}")

    errors.extend(_time_range_errors(slot))

    for existing in existing_slots:
        if (
            existing.id != slot.id
            and existing.day == slot.day
            and existing.start_time == slot.start_time
        ):
            errors.append(f"A time slot already starts at {slot.day} {slot.start_time}")
            break

    return errors


def _time_range_errors(slot: TimeSlot) -> list[str]:
    errors = []
    times_valid = True
    for label, value in (("start", slot.start_time), ("end", slot.end_time)):
        if not is_valid_time(value):
            errors.append(f"Invalid {label} time: '{value}'. Expected HH:MM")
            times_valid = False

    if times_valid and time_to_minutes(slot.end_time) <= time_to_minutes(slot.start_time):
        errors.append(f"End time {slot.end_time} must be after start time {slot.start_time}")

    return errors
