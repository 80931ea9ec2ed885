"""Tests for configuration loading."""

import json

import pytest

from timetable_generator.exceptions import ConfigurationError
from timetable_generator.loader import load_config, save_config


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load(self, tmp_path):
        path = _write(
            tmp_path / "config.json",
            {
                "subjects": [
                    {
                        "id": "math",
                        "name": "Math",
                        "duration": 50,
                        "frequency": 2,
                        "teacher": "Smith",
                        "preferredTimeSlots": ["mon-1"],
                    }
                ],
                "timeSlots": [
                    {"id": "mon-1", "day": "Monday", "startTime": "08:30", "endTime": "09:20"}
                ],
            },
        )
        config = load_config(path)

        assert config.subjects[0].preferred_time_slots == ["mon-1"]
        assert config.time_slots[0].duration == 50

    def test_missing_time_slots_uses_default_week(self, tmp_path):
        path = _write(tmp_path / "config.json", {"subjects": []})
        config = load_config(path)
        assert len(config.time_slots) == 40

    def test_empty_time_slots_kept_empty(self, tmp_path):
        path = _write(tmp_path / "config.json", {"subjects": [], "timeSlots": []})
        assert load_config(path).time_slots == []

    def test_file_not_found(self, tmp_path):
        with pytest.raises(ConfigurationError, match="file not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="invalid JSON"):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        path = _write(tmp_path / "config.json", [1, 2, 3])
        with pytest.raises(ConfigurationError, match="expected a JSON object"):
            load_config(path)

    def test_malformed_record(self, tmp_path):
        path = _write(tmp_path / "config.json", {"timeSlots": [{"id": "x"}]})
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.path == path


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path, sample_config):
        path = tmp_path / "nested" / "config.json"
        save_config(sample_config, path)
        assert load_config(path) == sample_config
