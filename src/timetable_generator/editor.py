"""Manual editing of a generated timetable with conflict re-checks.

Every returned message starts with a category tag such as
``TIME_CONFLICT:`` or ``WORKLOAD_VIOLATION:`` so callers can branch on the
category without parsing the prose. A mutation is applied only when its
check returns no messages. Only the edited entry is checked; the rest of
the timetable is not re-verified.

After generation an entry's ``teacher_id`` is authoritative: it may be
changed independently of the subject's teacher. ``teacher_overrides()``
lists the entries where the two differ.
"""

import logging

from .constants import MAX_TEACHER_SLOTS_PER_WEEK, ConflictType
from .models import EntryUpdate, GeneratedTimetable, Subject, TimeSlot, TimetableEntry, Violation
from .utils import generate_id

logger = logging.getLogger(__name__)


def new_entry_for_slot(
    subject: Subject,
    slot: TimeSlot,
    teacher_id: str | None = None,
    room_id: str | None = None,
) -> TimetableEntry:
    """Build an entry placing ``subject`` in ``slot``.

    Teacher and room default to the subject's own.
    """
    return TimetableEntry(
        id=generate_id(f"{subject.id}-{slot.id}"),
        subject_id=subject.id,
        time_slot_id=slot.id,
        teacher_id=(teacher_id or "").strip() or subject.teacher,
        day=slot.day,
        start_time=slot.start_time,
        end_time=slot.end_time,
        room_id=(room_id or "").strip() or subject.room,
    )


class TimetableEditor:
    """Applies add/update/delete edits to one in-memory timetable.

    Edits are expected to be serialized by the caller.
    """

    def __init__(
        self,
        timetable: GeneratedTimetable,
        subjects: list[Subject],
        max_teacher_slots: int = MAX_TEACHER_SLOTS_PER_WEEK,
    ) -> None:
        self.timetable = timetable
        self.subjects = subjects
        self.max_teacher_slots = max_teacher_slots

    @property
    def entries(self) -> list[TimetableEntry]:
        return self.timetable.entries

    def get_entry(self, entry_id: str) -> TimetableEntry | None:
        """Look up an entry by id."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def _subject_name(self, subject_id: str) -> str:
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject.name
        return "Unknown Subject"

    def _check_placement(
        self, candidate: TimetableEntry, others: list[TimetableEntry]
    ) -> list[Violation]:
        """Check a proposed entry against the other entries."""
        violations = []
        at_same_time = [
            e for e in others if e.day == candidate.day and e.start_time == candidate.start_time
        ]

        if at_same_time:
            names = ", ".join(self._subject_name(e.subject_id) for e in at_same_time)
            violations.append(
                Violation(
                    ConflictType.TIME_CONFLICT,
                    f"{candidate.day} {candidate.start_time} is already occupied by: {names}",
                )
            )

        if candidate.teacher_id:
            busy = [e for e in at_same_time if e.teacher_id == candidate.teacher_id]
            if busy:
                violations.append(
                    Violation(
                        ConflictType.TEACHER_CONFLICT,
                        f"Teacher {candidate.teacher_id} is already teaching "
                        f"{self._subject_name(busy[0].subject_id)} on {candidate.day} "
                        f"at {candidate.start_time}",
                    )
                )

            load = sum(1 for e in others if e.teacher_id == candidate.teacher_id)
            if load >= self.max_teacher_slots:
                violations.append(
                    Violation(
                        ConflictType.WORKLOAD_VIOLATION,
                        f"Teacher {candidate.teacher_id} already has {load} classes "
                        f"(maximum {self.max_teacher_slots} per week)",
                    )
                )

        if candidate.room_id:
            occupied = [e for e in at_same_time if e.room_id == candidate.room_id]
            if occupied:
                violations.append(
                    Violation(
                        ConflictType.ROOM_CONFLICT,
                        f"Room {candidate.room_id} is already used by "
                        f"{self._subject_name(occupied[0].subject_id)} on {candidate.day} "
                        f"at {candidate.start_time}",
                    )
                )

        return violations

    def _subject_exists(self, subject_id: str) -> bool:
        return any(s.id == subject_id for s in self.subjects)

    def check_update_conflicts(self, entry_id: str, changes: EntryUpdate) -> list[str]:
        """Check a proposed change to an existing entry.

        Unspecified fields keep their current values. The entry itself is
        excluded from the comparison set.

        Args:
            entry_id: Entry to change
            changes: Fields to change

        Returns:
            Tagged conflict messages (empty if the change is allowed)
        """
        entry = self.get_entry(entry_id)
        if entry is None:
            return [str(Violation(ConflictType.ENTRY_NOT_FOUND, f"Entry '{entry_id}' not found"))]

        candidate = changes.apply_to(entry)
        others = [e for e in self.entries if e.id != entry_id]
        violations = self._check_placement(candidate, others)

        if (
            changes.subject_id is not None
            and changes.subject_id != entry.subject_id
            and not self._subject_exists(changes.subject_id)
        ):
            violations.append(
                Violation(
                    ConflictType.INVALID_SUBJECT,
                    f"Subject '{changes.subject_id}' does not exist",
                )
            )

        return [str(v) for v in violations]

    def check_add_conflicts(self, entry: TimetableEntry) -> list[str]:
        """Check a new entry against the whole timetable.

        Args:
            entry: Proposed entry

        Returns:
            Tagged conflict messages (empty if the entry can be added)
        """
        violations = []

        if not entry.subject_id:
            violations.append(Violation(ConflictType.MISSING_SUBJECT, "Subject is required"))
        elif not self._subject_exists(entry.subject_id):
            violations.append(
                Violation(
                    ConflictType.INVALID_SUBJECT,
                    f"Subject '{entry.subject_id}' does not exist",
                )
            )

        if not entry.teacher_id:
            violations.append(Violation(ConflictType.MISSING_TEACHER, "Teacher is required"))

        violations.extend(self._check_placement(entry, self.entries))
        return [str(v) for v in violations]

    def update_entry(self, entry_id: str, changes: EntryUpdate) -> list[str]:
        """Apply a change if it is conflict free.

        Returns:
            Tagged conflict messages; the entry is unchanged when non-empty
        """
        conflicts = self.check_update_conflicts(entry_id, changes)
        if conflicts:
            logger.warning(f"Update of entry {entry_id} rejected: {len(conflicts)} conflicts")
            return conflicts

        for index, entry in enumerate(self.entries):
            if entry.id == entry_id:
                self.entries[index] = changes.apply_to(entry)
                break

        logger.info(f"Updated entry {entry_id}")
        return []

    def add_entry(self, entry: TimetableEntry) -> list[str]:
        """Append an entry if it is conflict free.

        An entry without an id gets a fresh one.

        Returns:
            Tagged conflict messages; nothing is added when non-empty
        """
        conflicts = self.check_add_conflicts(entry)
        if conflicts:
            logger.warning(f"New entry for {entry.subject_id} rejected: {len(conflicts)} conflicts")
            return conflicts

        if not entry.id:
            entry.id = generate_id(f"{entry.subject_id}-{entry.time_slot_id}")
        self.entries.append(entry)
        logger.info(f"Added entry {entry.id}")
        return []

    def delete_entry(self, entry_id: str) -> bool:
        """Remove an entry.

        Returns:
            True if an entry was removed
        """
        before = len(self.entries)
        self.timetable.entries = [e for e in self.entries if e.id != entry_id]
        removed = len(self.timetable.entries) < before
        if removed:
            logger.info(f"Deleted entry {entry_id}")
        return removed

    def has_unsaved_changes(self, baseline: list[TimetableEntry]) -> bool:
        """Compare the current entries with a persisted baseline."""
        return [e.to_dict() for e in self.entries] != [e.to_dict() for e in baseline]

    def teacher_overrides(self) -> list[TimetableEntry]:
        """Entries whose teacher differs from their subject's teacher."""
        teachers = {s.id: s.teacher for s in self.subjects}
        return [
            e
            for e in self.entries
            if e.subject_id in teachers and e.teacher_id != teachers[e.subject_id]
        ]
