"""Tests for scheduler utility functions."""

from conftest import make_entry, make_slot, make_subject

from timetable_generator.constants import WORKING_DAYS
from timetable_generator.scheduler.conflicts import ConflictTracker
from timetable_generator.scheduler.utils import (
    calculate_teacher_loads,
    default_priority_key,
    generate_default_time_slots,
    get_compatible_slots,
    order_slots_by_day_distribution,
    sort_subjects_by_priority,
)


class TestGenerateDefaultTimeSlots:
    """Tests for generate_default_time_slots."""

    def test_forty_slots(self):
        slots = generate_default_time_slots()
        assert len(slots) == 40

    def test_ids_and_days(self):
        slots = generate_default_time_slots()
        assert slots[0].id == "monday-1"
        assert slots[-1].id == "friday-8"
        assert [s.day for s in slots[::8]] == WORKING_DAYS

    def test_periods_skip_breaks(self):
        monday = [s for s in generate_default_time_slots() if s.day == "Monday"]
        assert [(s.start_time, s.end_time) for s in monday] == [
            ("08:30", "09:20"),
            ("09:20", "10:10"),
            ("10:10", "11:00"),
            ("11:30", "12:20"),
            ("12:20", "13:10"),
            ("14:00", "14:50"),
            ("14:50", "15:40"),
            ("15:40", "16:30"),
        ]

    def test_all_fifty_minutes(self):
        assert {s.duration for s in generate_default_time_slots()} == {50}


class TestGetCompatibleSlots:
    """Tests for get_compatible_slots."""

    def test_filters_by_duration(self):
        slots = [
            make_slot("short", start_time="08:30", end_time="09:00"),
            make_slot("long", start_time="09:00", end_time="10:30"),
        ]
        result = get_compatible_slots(make_subject(duration=60), slots)
        assert [s.id for s in result] == ["long"]

    def test_preferred_slots(self, week_slots):
        subject = make_subject(preferred_time_slots=["wed-2", "mon-1"])
        result = get_compatible_slots(subject, week_slots)
        assert [s.id for s in result] == ["mon-1", "wed-2"]

    def test_preferred_slots_still_need_duration(self, week_slots):
        subject = make_subject(duration=90, preferred_time_slots=["mon-1"])
        assert get_compatible_slots(subject, week_slots) == []

    def test_unknown_preferred_slots(self, week_slots):
        subject = make_subject(preferred_time_slots=["nowhere"])
        assert get_compatible_slots(subject, week_slots) == []

    def test_malformed_slots_excluded(self, week_slots):
        slots = [
            make_slot("bad", start_time="8am", end_time="9am"),
            make_slot("backwards", start_time="10:00", end_time="09:00"),
        ] + week_slots
        result = get_compatible_slots(make_subject(duration=30), slots)
        assert [s.id for s in result] == [s.id for s in week_slots]


class TestOrderSlotsByDayDistribution:
    """Tests for order_slots_by_day_distribution."""

    def test_unused_days_first(self, week_slots):
        result = order_slots_by_day_distribution(week_slots, {"Monday"})
        assert [s.id for s in result] == ["tue-1", "tue-2", "wed-1", "wed-2", "mon-1", "mon-2"]

    def test_no_used_days_keeps_order(self, week_slots):
        result = order_slots_by_day_distribution(week_slots, set())
        assert result == week_slots

    def test_all_days_used_keeps_order(self, week_slots):
        result = order_slots_by_day_distribution(
            week_slots, {"Monday", "Tuesday", "Wednesday"}
        )
        assert result == week_slots


class TestPriority:
    """Tests for the subject priority heuristic."""

    def test_calculate_teacher_loads(self, sample_subjects):
        assert calculate_teacher_loads(sample_subjects) == {"Smith": 3, "Jones": 2, "Brown": 1}

    def test_default_priority_key(self, sample_subjects, week_slots):
        tracker = ConflictTracker()
        loads = calculate_teacher_loads(sample_subjects)
        key = default_priority_key(sample_subjects[0], week_slots, loads, tracker)
        assert key == (0, 3, -6, 6, -2)

    def test_key_counts_used_days(self, week_slots):
        tracker = ConflictTracker()
        tracker.reserve(make_entry())
        subject = make_subject()
        key = default_priority_key(subject, week_slots, {"Smith": 1}, tracker)
        assert key == (1, 1, -4, 6, -1)

    def test_lighter_teacher_first(self, sample_subjects, week_slots):
        ordered = sort_subjects_by_priority(sample_subjects, week_slots, ConflictTracker())
        assert [s.id for s in ordered] == ["art", "history", "math", "physics"]

    def test_more_fresh_day_slots_first(self, week_slots):
        subjects = [
            make_subject("flexible", teacher="A"),
            make_subject("picky", teacher="B", preferred_time_slots=["tue-2"]),
        ]
        ordered = sort_subjects_by_priority(subjects, week_slots, ConflictTracker())
        assert [s.id for s in ordered] == ["flexible", "picky"]

    def test_higher_frequency_breaks_ties(self, week_slots):
        # Both teachers have a declared load of 2
        subjects = [
            make_subject("x", teacher="A", frequency=1),
            make_subject("y", teacher="A", frequency=1),
            make_subject("z", teacher="B", frequency=2),
        ]
        ordered = sort_subjects_by_priority(subjects, week_slots, ConflictTracker())
        assert [s.id for s in ordered] == ["z", "x", "y"]

    def test_stable_for_equal_keys(self, week_slots):
        subjects = [make_subject("b", teacher="X"), make_subject("a", teacher="Y")]
        ordered = sort_subjects_by_priority(subjects, week_slots, ConflictTracker())
        assert [s.id for s in ordered] == ["b", "a"]
