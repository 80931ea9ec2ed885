"""Conflict reports for occurrences that could not be scheduled."""

from ..constants import SCHEDULING_CONFLICT, ConflictType, day_index
from ..models import Conflict, RejectedSlot, Subject, TimeSlot


def generate_suggestions(subject: Subject, categories: set[ConflictType]) -> list[str]:
    """Pick remediation hints from the violation categories seen.

    Args:
        subject: Subject that could not be placed
        categories: Violation categories across all rejected slots

    Returns:
        Suggestions in a fixed order
    """
    suggestions = []

    if ConflictType.TEACHER_CONFLICT in categories:
        suggestions.append("Assign a different teacher or adjust teacher's schedule")

    if ConflictType.WORKLOAD_VIOLATION in categories:
        suggestions.append(
            f"Rebalance sessions so {subject.teacher} stays within the weekly limit"
        )

    if ConflictType.ROOM_CONFLICT in categories:
        suggestions.append("Assign a different room or create additional room slots")

    if ConflictType.TIME_CONFLICT in categories:
        suggestions.append("Add more parallel time slots or reschedule conflicting subjects")

    if ConflictType.INSUFFICIENT_DURATION in categories:
        suggestions.append(
            f"Extend time slots to at least {subject.duration} minutes "
            "or reduce subject duration"
        )

    if subject.frequency > 1:
        suggestions.append("Consider reducing subject frequency per week")

    return suggestions


def _no_slots_suggestions(subject: Subject) -> list[str]:
    suggestions = []
    if subject.duration > 60:
        suggestions.append("Consider reducing subject duration")
    if subject.preferred_time_slots:
        suggestions.append("Consider expanding preferred time slots")
    suggestions.append("Add more time slots to the schedule")
    return suggestions


def build_conflict(
    subject: Subject,
    rejected_slots: list[RejectedSlot],
    candidates: list[TimeSlot],
    used_days: set[str],
) -> Conflict:
    """Build the conflict record for one dropped occurrence.

    Args:
        subject: Subject whose occurrence was dropped
        rejected_slots: Every candidate tried, with its violations
        candidates: Compatible slots for the subject (may be empty)
        used_days: Days the teacher was already teaching on

    Returns:
        Conflict with structured fields and rendered description
    """
    if not candidates:
        suggestions = _no_slots_suggestions(subject)
    else:
        categories = {v.category for slot in rejected_slots for v in slot.violations}
        suggestions = generate_suggestions(subject, categories)

    conflict = Conflict(
        type=SCHEDULING_CONFLICT,
        description="",
        affected_entries=[],
        subject_id=subject.id,
        rejected_slots=rejected_slots,
        suggestions=suggestions,
    )
    conflict.description = render_conflict_report(subject, conflict, used_days)
    return conflict


def render_conflict_report(subject: Subject, conflict: Conflict, used_days: set[str]) -> str:
    """Render a conflict as a multi-line human readable paragraph."""
    lines = [f'Unable to schedule "{subject.name}":', ""]

    if subject.teacher and used_days:
        days = ", ".join(sorted(used_days, key=day_index))
        lines.append(f"Teacher {subject.teacher} already teaches on: {days}")

    if not conflict.rejected_slots:
        lines.append("No compatible time slots found.")
    else:
        lines.append("Conflicts found in available time slots:")
        for slot in conflict.rejected_slots:
            reasons = "; ".join(v.message for v in slot.violations)
            lines.append(f"• {slot.label}: {reasons}")

    if conflict.suggestions:
        lines.append("")
        lines.append(f"Suggestions: {', '.join(conflict.suggestions)}.")

    return "\n".join(lines)
