"""Conflict tracking for timetable generation."""

import logging
from collections import defaultdict

from ..constants import MAX_TEACHER_SLOTS_PER_WEEK, ConflictType
from ..models import Subject, TimeSlot, TimetableEntry, Violation
from ..utils import times_overlap

logger = logging.getLogger(__name__)


class ConflictTracker:
    """Tracks committed entries and detects conflicts for candidate slots.

    A tracker is scratch state for a single generation run:
    - entries: committed placements in commit order
    - teacher_days: which days each teacher already teaches on
    - teacher_counts: how many sessions each teacher already holds
    """

    def __init__(
        self,
        subjects: list[Subject] | None = None,
        max_teacher_slots: int = MAX_TEACHER_SLOTS_PER_WEEK,
    ) -> None:
        self.max_teacher_slots = max_teacher_slots
        self.entries: list[TimetableEntry] = []
        # teacher -> days with at least one committed entry
        self.teacher_days: dict[str, set[str]] = defaultdict(set)
        # teacher -> committed entry count
        self.teacher_counts: dict[str, int] = defaultdict(int)
        self._subject_names = {s.id: s.name for s in subjects or []}

    def reserve(self, entry: TimetableEntry) -> None:
        """Commit an entry."""
        self.entries.append(entry)
        if entry.teacher_id:
            self.teacher_days[entry.teacher_id].add(entry.day)
            self.teacher_counts[entry.teacher_id] += 1

    def get_teacher_days(self, teacher: str) -> set[str]:
        """Days on which the teacher already has committed entries."""
        return set(self.teacher_days.get(teacher, set()))

    def get_teacher_load(self, teacher: str) -> int:
        """Number of committed entries held by the teacher."""
        return self.teacher_counts.get(teacher, 0)

    def _subject_name(self, subject_id: str) -> str:
        return self._subject_names.get(subject_id, "Unknown Subject")

    def _overlapping(self, slot: TimeSlot) -> list[TimetableEntry]:
        return [
            entry
            for entry in self.entries
            if entry.day == slot.day
            and times_overlap(entry.start_time, entry.end_time, slot.start_time, slot.end_time)
        ]

    def detect_conflicts(self, subject: Subject, slot: TimeSlot) -> list[Violation]:
        """Collect every reason ``subject`` cannot be placed in ``slot``.

        All checks run; the slot is usable only if the returned list is empty.

        Args:
            subject: Subject whose next occurrence is being placed
            slot: Candidate time slot

        Returns:
            List of violations (empty if the slot is free)
        """
        violations: list[Violation] = []

        if slot.duration < subject.duration:
            violations.append(
                Violation(
                    ConflictType.INSUFFICIENT_DURATION,
                    f"Insufficient time slot duration: {slot.duration}min < "
                    f"{subject.duration}min required",
                )
            )

        overlapping = self._overlapping(slot)

        if overlapping:
            names = ", ".join(self._subject_name(e.subject_id) for e in overlapping)
            violations.append(
                Violation(ConflictType.TIME_CONFLICT, f"Time slot already occupied by: {names}")
            )

        if subject.teacher:
            teacher_entries = [e for e in overlapping if e.teacher_id == subject.teacher]
            if teacher_entries:
                names = ", ".join(self._subject_name(e.subject_id) for e in teacher_entries)
                violations.append(
                    Violation(
                        ConflictType.TEACHER_CONFLICT,
                        f"Teacher {subject.teacher} is already assigned to: {names} "
                        "at this time",
                    )
                )

            load = self.get_teacher_load(subject.teacher)
            if load >= self.max_teacher_slots:
                violations.append(
                    Violation(
                        ConflictType.WORKLOAD_VIOLATION,
                        f"Teacher {subject.teacher} has reached the maximum of "
                        f"{self.max_teacher_slots} slots/week (currently {load})",
                    )
                )

        if subject.room:
            room_entries = [e for e in overlapping if e.room_id == subject.room]
            if room_entries:
                names = ", ".join(self._subject_name(e.subject_id) for e in room_entries)
                violations.append(
                    Violation(
                        ConflictType.ROOM_CONFLICT,
                        f"Room {subject.room} is already occupied by: {names} at this time",
                    )
                )

        if violations:
            logger.debug(f"{slot.label} rejected for '{subject.name}': {len(violations)} conflicts")

        return violations

    def is_slot_available(self, subject: Subject, slot: TimeSlot) -> bool:
        """Check if a subject can be placed in a slot."""
        return not self.detect_conflicts(subject, slot)
