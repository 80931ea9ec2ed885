"""Greedy timetable generation."""

import logging
from collections import Counter

from ..constants import MAX_TEACHER_SLOTS_PER_WEEK
from ..models import (
    Conflict,
    GeneratedTimetable,
    GenerationStatistics,
    RejectedSlot,
    Subject,
    TimeSlot,
    TimetableConfig,
    TimetableEntry,
)
from ..utils import generate_id
from .conflicts import ConflictTracker
from .report import build_conflict
from .utils import (
    PriorityKey,
    default_priority_key,
    generate_default_time_slots,
    get_compatible_slots,
    order_slots_by_day_distribution,
    sort_subjects_by_priority,
)

logger = logging.getLogger(__name__)


class TimetableGenerator:
    """Assigns subject occurrences to time slots in a single greedy pass.

    Generation steps:
    1. Sort: subjects by priority key (computed once, before placement)
    2. For each of a subject's ``frequency`` occurrences:
       - Candidates: preferred slots (if any) long enough for the subject
       - Order: slots on days the teacher does not teach yet come first
       - Commit the first candidate without conflicts
       - Otherwise record a conflict and drop the occurrence
    3. Completion rate: placed occurrences / required occurrences x 100

    There is no backtracking: a placement is never revisited once committed.
    All mutable state lives in a ConflictTracker created per ``generate()``
    call, so the generator can be reused but not shared between threads.
    """

    def __init__(
        self,
        config: TimetableConfig,
        priority_key: PriorityKey = default_priority_key,
        max_teacher_slots: int = MAX_TEACHER_SLOTS_PER_WEEK,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Subjects and time slots (read only)
            priority_key: Sort key used to order subjects
            max_teacher_slots: Weekly session cap per teacher
        """
        self.config = config
        self.priority_key = priority_key
        self.max_teacher_slots = max_teacher_slots

    @staticmethod
    def generate_default_time_slots() -> list[TimeSlot]:
        """Default week of time slots for a configuration without any."""
        return generate_default_time_slots()

    def generate(self) -> GeneratedTimetable:
        """Generate a timetable for the configuration.

        Returns:
            GeneratedTimetable with entries, conflicts and completion rate
        """
        tracker = ConflictTracker(self.config.subjects, self.max_teacher_slots)
        conflicts: list[Conflict] = []

        ordered = sort_subjects_by_priority(
            self.config.subjects,
            self.config.time_slots,
            tracker,
            self.priority_key,
        )

        logger.info(
            f"Scheduling {len(ordered)} subjects into {len(self.config.time_slots)} time slots"
        )

        total = 0
        scheduled = 0
        for subject in ordered:
            for _ in range(subject.frequency):
                total += 1
                result = self._assign_occurrence(subject, tracker)
                if isinstance(result, TimetableEntry):
                    tracker.reserve(result)
                    scheduled += 1
                else:
                    conflicts.append(result)

        completion_rate = (scheduled / total) * 100 if total > 0 else 0.0
        entries = list(tracker.entries)

        logger.info(
            f"Scheduled {scheduled}/{total} occurrences ({completion_rate:.1f}%), "
            f"{len(conflicts)} conflicts"
        )

        return GeneratedTimetable(
            entries=entries,
            conflicts=conflicts,
            success=not conflicts and completion_rate == 100,
            completion_rate=completion_rate,
            statistics=self._compute_statistics(entries, total, scheduled),
        )

    def _assign_occurrence(
        self, subject: Subject, tracker: ConflictTracker
    ) -> TimetableEntry | Conflict:
        """Place one occurrence of a subject.

        Args:
            subject: Subject to place
            tracker: Conflict tracker for the current run

        Returns:
            The new entry, or the conflict explaining why none was possible
        """
        candidates = get_compatible_slots(subject, self.config.time_slots)
        used_days = tracker.get_teacher_days(subject.teacher)
        ordered = order_slots_by_day_distribution(candidates, used_days)

        rejected: list[RejectedSlot] = []
        for slot in ordered:
            violations = tracker.detect_conflicts(subject, slot)
            if not violations:
                return TimetableEntry(
                    id=generate_id(f"{subject.id}-{slot.id}"),
                    subject_id=subject.id,
                    time_slot_id=slot.id,
                    teacher_id=subject.teacher,
                    day=slot.day,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    room_id=subject.room,
                )
            rejected.append(
                RejectedSlot(
                    slot_id=slot.id,
                    day=slot.day,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    violations=violations,
                )
            )

        logger.warning(
            f"Could not place an occurrence of '{subject.name}' "
            f"({len(candidates)} candidate slots)"
        )
        return build_conflict(subject, rejected, candidates, used_days)

    def _compute_statistics(
        self, entries: list[TimetableEntry], total: int, scheduled: int
    ) -> GenerationStatistics:
        """Compute statistics from committed entries."""
        return GenerationStatistics(
            total_required=total,
            total_scheduled=scheduled,
            total_unscheduled=total - scheduled,
            by_day=dict(Counter(e.day for e in entries)),
            by_teacher=dict(Counter(e.teacher_id for e in entries)),
        )


def generate_timetable(
    config: TimetableConfig,
    priority_key: PriorityKey = default_priority_key,
) -> GeneratedTimetable:
    """Generate a timetable with a fresh generator."""
    return TimetableGenerator(config, priority_key=priority_key).generate()


def create_generator(
    subjects: list[Subject],
    time_slots: list[TimeSlot] | None = None,
    priority_key: PriorityKey = default_priority_key,
) -> TimetableGenerator:
    """Factory function to create a generator.

    Args:
        subjects: Subjects to schedule
        time_slots: Available slots; defaults to the standard week
        priority_key: Sort key used to order subjects

    Returns:
        Configured TimetableGenerator instance
    """
    if time_slots is None:
        time_slots = generate_default_time_slots()
    return TimetableGenerator(
        TimetableConfig(subjects=list(subjects), time_slots=list(time_slots)),
        priority_key=priority_key,
    )
