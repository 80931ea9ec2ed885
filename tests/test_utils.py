"""Tests for time and identifier helpers."""

import pytest

from timetable_generator.utils import (
    calculate_duration,
    generate_id,
    is_valid_time,
    time_to_minutes,
    times_overlap,
)


class TestIsValidTime:
    """Tests for is_valid_time function."""

    @pytest.mark.parametrize("value", ["00:00", "08:30", "13:05", "23:59"])
    def test_valid(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", ["", "8:30", "24:00", "12:60", "08-30", "08:30:00"])
    def test_invalid(self, value):
        assert not is_valid_time(value)


class TestTimeConversion:
    """Tests for minute conversion helpers."""

    def test_time_to_minutes(self):
        assert time_to_minutes("08:30") == 510
        assert time_to_minutes("00:00") == 0

    def test_calculate_duration(self):
        assert calculate_duration("08:30", "09:20") == 50
        assert calculate_duration("14:00", "15:30") == 90


class TestTimesOverlap:
    """Tests for times_overlap function."""

    def test_identical(self):
        assert times_overlap("08:30", "09:20", "08:30", "09:20")

    def test_partial(self):
        assert times_overlap("08:30", "09:20", "09:00", "09:50")
        assert times_overlap("09:00", "09:50", "08:30", "09:20")

    def test_contained(self):
        assert times_overlap("08:00", "12:00", "09:00", "10:00")

    def test_touching(self):
        assert not times_overlap("08:30", "09:20", "09:20", "10:10")
        assert not times_overlap("09:20", "10:10", "08:30", "09:20")

    def test_disjoint(self):
        assert not times_overlap("08:30", "09:20", "14:00", "14:50")


class TestGenerateId:
    """Tests for generate_id function."""

    def test_prefix(self):
        value = generate_id("math-mon-1")
        assert value.startswith("math-mon-1-")
        assert len(value) == len("math-mon-1-") + 8

    def test_no_prefix(self):
        assert len(generate_id()) == 8

    def test_unique(self):
        assert len({generate_id("x") for _ in range(100)}) == 100
