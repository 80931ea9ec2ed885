"""Tests for TimetableStore class."""

import pytest

from timetable_generator.exceptions import StorageError
from timetable_generator.models import GeneratedTimetable
from timetable_generator.storage import TimetableStore


@pytest.fixture
def store(tmp_path):
    return TimetableStore(tmp_path / "timetables")


@pytest.fixture
def saved_id(store, sample_subjects, week_slots, sample_timetable):
    return store.save("Autumn term", sample_subjects, week_slots, sample_timetable)


class TestTimetableStore:
    """Tests for TimetableStore class."""

    def test_save_creates_file(self, store, saved_id):
        assert TimetableStore.is_valid_id(saved_id)
        assert (store.storage_dir / f"{saved_id}.json").exists()

    def test_load(self, store, saved_id, sample_timetable):
        record = store.load(saved_id)

        assert record.name == "Autumn term"
        assert record.generated_timetable == sample_timetable
        assert record.metadata.total_subjects == 4
        assert record.metadata.total_time_slots == 6
        assert record.metadata.completion_rate == 100.0
        assert record.created_at == record.updated_at

    def test_save_requires_name(self, store, sample_subjects, week_slots, sample_timetable):
        with pytest.raises(StorageError, match="a name is required"):
            store.save("  ", sample_subjects, week_slots, sample_timetable)

    def test_load_invalid_id(self, store):
        assert store.load("not-an-id") is None

    def test_load_unknown_id(self, store):
        assert store.load("0" * 32) is None

    def test_load_all_empty(self, store):
        assert store.load_all() == []

    def test_load_all_most_recent_first(self, store, saved_id, sample_subjects, week_slots):
        second = store.save("Spring term", sample_subjects, week_slots, GeneratedTimetable())
        store.update(saved_id, name="Autumn term (rev)")

        names = [r.name for r in store.load_all()]
        assert names == ["Autumn term (rev)", "Spring term"]
        assert store.load(second) is not None

    def test_update(self, store, saved_id):
        before = store.load(saved_id)
        assert store.update(saved_id, description="Second draft") is True

        record = store.load(saved_id)
        assert record.description == "Second draft"
        assert record.created_at == before.created_at
        assert record.updated_at >= before.updated_at

    def test_update_recomputes_metadata(self, store, saved_id):
        generated = GeneratedTimetable(completion_rate=50.0)
        store.update(saved_id, generated_timetable=generated)

        record = store.load(saved_id)
        assert record.metadata.completion_rate == 50.0
        assert record.generated_timetable.entries == []

    def test_update_unknown_field(self, store, saved_id):
        with pytest.raises(StorageError, match="unknown fields: id"):
            store.update(saved_id, id="other")

    def test_update_missing(self, store):
        assert store.update("0" * 32, name="x") is False

    def test_delete(self, store, saved_id):
        assert store.delete(saved_id) is True
        assert store.load(saved_id) is None
        assert store.delete(saved_id) is False

    def test_delete_invalid_id(self, store):
        assert store.delete("../etc/passwd") is False

    def test_corrupt_file(self, store, saved_id):
        (store.storage_dir / f"{saved_id}.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(StorageError, match="Failed to load timetable"):
            store.load(saved_id)

    def test_load_all_skips_unreadable_files(self, store, saved_id):
        (store.storage_dir / ("a" * 32 + ".json")).write_text("{broken", encoding="utf-8")

        records = store.load_all()
        assert [r.id for r in records] == [saved_id]
        assert store.get_stats()["total_timetables"] == 1

    def test_get_stats(self, store, saved_id, sample_subjects, week_slots):
        store.save("Empty", sample_subjects[:1], week_slots, GeneratedTimetable())
        stats = store.get_stats()

        assert stats["total_timetables"] == 2
        assert stats["average_completion_rate"] == pytest.approx(50.0)
        assert stats["total_subjects"] == 5
        assert stats["total_conflicts"] == 0
        assert stats["last_updated"] is not None

    def test_get_stats_empty(self, store):
        stats = store.get_stats()
        assert stats["total_timetables"] == 0
        assert stats["last_updated"] is None
