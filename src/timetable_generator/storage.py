"""JSON-file persistence for saved timetables."""

import json
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from .exceptions import StorageError
from .models import GeneratedTimetable, SavedTimetable, Subject, TimeSlot, TimetableMetadata

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

# Fields that update() may replace
UPDATABLE_FIELDS = {"name", "description", "subjects", "time_slots", "generated_timetable"}


class TimetableStore:
    """Stores each timetable as ``<id>.json`` in a directory."""

    def __init__(self, storage_dir: str | Path, indent: int = 2, ensure_ascii: bool = False):
        """Initialize the store.

        Args:
            storage_dir: Directory holding timetable files (created on first save)
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.storage_dir = Path(storage_dir)
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    @staticmethod
    def is_valid_id(timetable_id: str) -> bool:
        return bool(timetable_id) and ID_PATTERN.match(timetable_id) is not None

    def _path(self, timetable_id: str) -> Path:
        return self.storage_dir / f"{timetable_id}.json"

    def _write(self, record: SavedTimetable, operation: str) -> None:
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            with open(self._path(record.id), "w", encoding="utf-8") as f:
                json.dump(
                    record.to_dict(), f, indent=self.indent, ensure_ascii=self.ensure_ascii
                )
        except OSError as e:
            logger.error(f"Error writing timetable {record.id}: {e}")
            raise StorageError(operation, str(e)) from e

    def _read(self, path: Path) -> SavedTimetable:
        try:
            with open(path, encoding="utf-8") as f:
                return SavedTimetable.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error reading timetable file {path}: {e}")
            raise StorageError("load", f"{path.name}: {e}") from e

    def save(
        self,
        name: str,
        subjects: list[Subject],
        time_slots: list[TimeSlot],
        generated_timetable: GeneratedTimetable,
        description: str | None = None,
    ) -> str:
        """Save a new timetable.

        Args:
            name: Display name (required)
            subjects: Subjects the timetable was generated from
            time_slots: Time slots the timetable was generated from
            generated_timetable: Generation result
            description: Optional free text

        Returns:
            Id of the saved timetable
        """
        if not name or not name.strip():
            raise StorageError("save", "a name is required")

        now = datetime.now().isoformat()
        record = SavedTimetable(
            id=uuid.uuid4().hex,
            name=name.strip(),
            description=description,
            subjects=list(subjects),
            time_slots=list(time_slots),
            generated_timetable=generated_timetable,
            created_at=now,
            updated_at=now,
            metadata=TimetableMetadata.build(subjects, time_slots, generated_timetable),
        )
        self._write(record, "save")
        logger.info(f"Timetable saved successfully with id {record.id}")
        return record.id

    def load(self, timetable_id: str) -> SavedTimetable | None:
        """Load one timetable, or None if the id is invalid or unknown."""
        if not self.is_valid_id(timetable_id):
            logger.info(f"Invalid timetable id format: {timetable_id}")
            return None

        path = self._path(timetable_id)
        if not path.exists():
            logger.info(f"Timetable not found: {timetable_id}")
            return None

        return self._read(path)

    def load_all(self) -> list[SavedTimetable]:
        """Load every timetable, most recently updated first.

        Unreadable files are logged and skipped.
        """
        if not self.storage_dir.exists():
            return []

        records = []
        for path in sorted(self.storage_dir.glob("*.json")):
            try:
                records.append(self._read(path))
            except StorageError as e:
                logger.warning(f"Skipping {path.name}: {e}")
        records.sort(key=lambda r: r.updated_at, reverse=True)
        logger.info(f"Loaded {len(records)} timetables")
        return records

    def update(self, timetable_id: str, **changes: Any) -> bool:
        """Replace fields of a saved timetable.

        Accepted fields: name, description, subjects, time_slots,
        generated_timetable. Metadata is recomputed.

        Returns:
            True if a timetable was updated
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise StorageError("update", f"unknown fields: {', '.join(sorted(unknown))}")

        record = self.load(timetable_id)
        if record is None:
            return False

        for key, value in changes.items():
            setattr(record, key, value)
        record.updated_at = datetime.now().isoformat()
        record.metadata = TimetableMetadata.build(
            record.subjects, record.time_slots, record.generated_timetable
        )
        self._write(record, "update")
        logger.info(f"Timetable {timetable_id} updated")
        return True

    def delete(self, timetable_id: str) -> bool:
        """Delete a saved timetable.

        Returns:
            True if a timetable was deleted
        """
        if not self.is_valid_id(timetable_id):
            logger.info(f"Invalid timetable id format for delete: {timetable_id}")
            return False

        path = self._path(timetable_id)
        if not path.exists():
            return False

        try:
            path.unlink()
        except OSError as e:
            raise StorageError("delete", str(e)) from e

        logger.info(f"Timetable {timetable_id} deleted")
        return True

    def get_stats(self) -> dict[str, Any]:
        """Aggregate statistics over all saved timetables."""
        records = self.load_all()
        if not records:
            return {
                "total_timetables": 0,
                "average_completion_rate": 0.0,
                "total_subjects": 0,
                "total_conflicts": 0,
                "last_updated": None,
            }

        return {
            "total_timetables": len(records),
            "average_completion_rate": (
                sum(r.metadata.completion_rate for r in records) / len(records)
            ),
            "total_subjects": sum(r.metadata.total_subjects for r in records),
            "total_conflicts": sum(r.metadata.conflict_count for r in records),
            "last_updated": max(r.updated_at for r in records),
        }
