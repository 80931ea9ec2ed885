"""Greedy constraint-satisfaction timetable generation.

The generator orders subjects by a priority heuristic, then places each
required occurrence in the first conflict-free candidate slot, preferring
days the subject's teacher is not teaching on yet.

Main classes:
- TimetableGenerator: Single-pass greedy assignment engine
- ConflictTracker: Committed entries and per-slot conflict detection

Usage:
    from timetable_generator.scheduler import create_generator

    generator = create_generator(subjects)
    result = generator.generate()
"""

from .algorithm import TimetableGenerator, create_generator, generate_timetable
from .conflicts import ConflictTracker
from .report import build_conflict, generate_suggestions, render_conflict_report
from .utils import (
    PriorityKey,
    calculate_teacher_loads,
    default_priority_key,
    generate_default_time_slots,
    get_compatible_slots,
    order_slots_by_day_distribution,
    sort_subjects_by_priority,
)

__all__ = [
    # Engine
    "TimetableGenerator",
    "create_generator",
    "generate_timetable",
    "ConflictTracker",
    # Reports
    "build_conflict",
    "generate_suggestions",
    "render_conflict_report",
    # Heuristics
    "PriorityKey",
    "calculate_teacher_loads",
    "default_priority_key",
    "generate_default_time_slots",
    "get_compatible_slots",
    "order_slots_by_day_distribution",
    "sort_subjects_by_priority",
]
