"""Timetable Generator - greedy weekly class scheduling.

This module provides tools to validate a set of subjects and time slots,
generate a conflict-free weekly timetable, explain every occurrence that
could not be placed, and edit the result by hand with conflict re-checks.

Example usage:
    from timetable_generator import load_config, validate_configuration
    from timetable_generator import TimetableGenerator

    config = load_config("config.json")
    validation = validate_configuration(config)
    if validation.is_valid:
        result = TimetableGenerator(config).generate()
        print(f"Completion: {result.completion_rate:.1f}%")

        for conflict in result.conflicts:
            print(conflict.description)

    # Save and export
    from timetable_generator.storage import TimetableStore
    from timetable_generator.exporters import ExcelExporter

    store = TimetableStore("data/timetables")
    timetable_id = store.save("Autumn term", config.subjects, config.time_slots, result)
    ExcelExporter().export(store.load(timetable_id), "timetable.xlsx")
"""

from .constants import MAX_TEACHER_SLOTS_PER_WEEK, ConflictType
from .editor import TimetableEditor, new_entry_for_slot
from .exceptions import (
    ConfigurationError,
    ExportError,
    StorageError,
    TimetableError,
    TimetableNotFoundError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .loader import load_config, save_config
from .models import (
    Conflict,
    EntryUpdate,
    GeneratedTimetable,
    GenerationStatistics,
    RejectedSlot,
    SavedTimetable,
    Subject,
    TimeSlot,
    TimetableConfig,
    TimetableEntry,
    ValidationResult,
    Violation,
)
from .scheduler import (
    ConflictTracker,
    TimetableGenerator,
    create_generator,
    generate_default_time_slots,
    generate_timetable,
)
from .storage import TimetableStore
from .validators import validate_configuration, validate_subject, validate_time_slot

__version__ = "0.1.0"

__all__ = [
    # Generation
    "TimetableGenerator",
    "ConflictTracker",
    "create_generator",
    "generate_timetable",
    "generate_default_time_slots",
    # Validation
    "validate_configuration",
    "validate_subject",
    "validate_time_slot",
    # Editing
    "TimetableEditor",
    "new_entry_for_slot",
    # Persistence and I/O
    "TimetableStore",
    "load_config",
    "save_config",
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Models
    "Subject",
    "TimeSlot",
    "TimetableEntry",
    "EntryUpdate",
    "Violation",
    "RejectedSlot",
    "Conflict",
    "GenerationStatistics",
    "GeneratedTimetable",
    "TimetableConfig",
    "ValidationResult",
    "SavedTimetable",
    # Constants
    "ConflictType",
    "MAX_TEACHER_SLOTS_PER_WEEK",
    # Exceptions
    "TimetableError",
    "ConfigurationError",
    "StorageError",
    "TimetableNotFoundError",
    "ExportError",
]
