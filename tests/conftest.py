"""Test fixtures for timetable generator tests."""

import pytest

from timetable_generator.models import (
    GeneratedTimetable,
    Subject,
    TimeSlot,
    TimetableConfig,
    TimetableEntry,
)


def make_subject(
    id="math",
    name="Math",
    duration=50,
    frequency=1,
    teacher="Smith",
    room=None,
    preferred_time_slots=None,
):
    return Subject(
        id=id,
        name=name,
        duration=duration,
        frequency=frequency,
        teacher=teacher,
        room=room,
        preferred_time_slots=list(preferred_time_slots or []),
    )


def make_slot(id="mon-1", day="Monday", start_time="08:30", end_time="09:20"):
    return TimeSlot(id=id, day=day, start_time=start_time, end_time=end_time)


def make_entry(
    id="e1",
    subject_id="math",
    teacher_id="Smith",
    day="Monday",
    start_time="08:30",
    end_time="09:20",
    room_id=None,
    time_slot_id="mon-1",
):
    return TimetableEntry(
        id=id,
        subject_id=subject_id,
        time_slot_id=time_slot_id,
        teacher_id=teacher_id,
        day=day,
        start_time=start_time,
        end_time=end_time,
        room_id=room_id,
    )


@pytest.fixture
def week_slots():
    """Two 50-minute periods on Monday through Wednesday."""
    slots = []
    for day in ["Monday", "Tuesday", "Wednesday"]:
        slots.append(make_slot(f"{day[:3].lower()}-1", day, "08:30", "09:20"))
        slots.append(make_slot(f"{day[:3].lower()}-2", day, "09:20", "10:10"))
    return slots


@pytest.fixture
def sample_subjects():
    """Subjects for three teachers, one of them at the weekly limit."""
    return [
        make_subject("math", "Math", 50, 2, "Smith", room="101"),
        make_subject("physics", "Physics", 50, 1, "Smith", room="102"),
        make_subject("history", "History", 50, 2, "Jones"),
        make_subject("art", "Art", 50, 1, "Brown", room="101"),
    ]


@pytest.fixture
def sample_config(sample_subjects, week_slots):
    return TimetableConfig(subjects=sample_subjects, time_slots=week_slots)


@pytest.fixture
def sample_timetable():
    """A small generated timetable with three entries."""
    return GeneratedTimetable(
        entries=[
            make_entry("e1", "math", "Smith", "Monday", "08:30", "09:20", "101", "mon-1"),
            make_entry("e2", "history", "Jones", "Monday", "09:20", "10:10", None, "mon-2"),
            make_entry("e3", "art", "Brown", "Tuesday", "08:30", "09:20", "101", "tue-1"),
        ],
        conflicts=[],
        success=True,
        completion_rate=100.0,
    )
