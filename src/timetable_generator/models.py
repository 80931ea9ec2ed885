"""Data models for the timetable generator.

Records serialize to the camelCase JSON documents used by saved timetables
and configuration files (``startTime``, ``teacherId``, ``completionRate`` ...).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .constants import SCHEDULING_CONFLICT, ConflictType
from .utils import calculate_duration, is_valid_time


@dataclass
class Subject:
    """A recurring class that needs ``frequency`` sessions per week."""

    id: str
    name: str
    duration: int
    frequency: int
    teacher: str
    room: str | None = None
    preferred_time_slots: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subject":
        """Create a Subject from a dictionary."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            duration=int(data.get("duration", 50)),
            frequency=int(data.get("frequency", 1)),
            teacher=(data.get("teacher") or "").strip(),
            room=data.get("room") or None,
            preferred_time_slots=list(data.get("preferredTimeSlots") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert subject to dictionary."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "frequency": self.frequency,
            "teacher": self.teacher,
        }
        if self.room:
            data["room"] = self.room
        if self.preferred_time_slots:
            data["preferredTimeSlots"] = list(self.preferred_time_slots)
        return data


@dataclass
class TimeSlot:
    """A fixed (day, start, end) interval available for scheduling."""

    id: str
    day: str
    start_time: str
    end_time: str
    duration: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        # Duration always follows the times; malformed times give 0
        if is_valid_time(self.start_time) and is_valid_time(self.end_time):
            self.duration = calculate_duration(self.start_time, self.end_time)
        else:
            self.duration = 0

    @property
    def is_well_formed(self) -> bool:
        """True if both times are HH:MM and the slot ends after it starts."""
        return self.duration > 0

    @property
    def label(self) -> str:
        """Readable label like 'Monday 08:30-09:20'."""
        return f"{self.day} {self.start_time}-{self.end_time}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeSlot":
        """Create a TimeSlot from a dictionary."""
        return cls(
            id=str(data["id"]),
            day=data["day"],
            start_time=data["startTime"],
            end_time=data["endTime"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert time slot to dictionary."""
        return {
            "id": self.id,
            "day": self.day,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
        }


@dataclass
class TimetableEntry:
    """One committed placement of a subject occurrence."""

    id: str
    subject_id: str
    time_slot_id: str
    teacher_id: str
    day: str
    start_time: str
    end_time: str
    room_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimetableEntry":
        """Create a TimetableEntry from a dictionary."""
        return cls(
            id=str(data["id"]),
            subject_id=data.get("subjectId", ""),
            time_slot_id=data.get("timeSlotId", ""),
            teacher_id=data.get("teacherId", ""),
            day=data["day"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            room_id=data.get("roomId") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary."""
        data: dict[str, Any] = {
            "id": self.id,
            "subjectId": self.subject_id,
            "timeSlotId": self.time_slot_id,
            "teacherId": self.teacher_id,
            "day": self.day,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
        if self.room_id:
            data["roomId"] = self.room_id
        return data


@dataclass
class EntryUpdate:
    """Partial change to an entry; ``None`` keeps the current value."""

    subject_id: str | None = None
    teacher_id: str | None = None
    room_id: str | None = None
    day: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    time_slot_id: str | None = None

    def apply_to(self, entry: TimetableEntry) -> TimetableEntry:
        """Return a copy of ``entry`` with the given fields replaced."""
        return TimetableEntry(
            id=entry.id,
            subject_id=self.subject_id if self.subject_id is not None else entry.subject_id,
            time_slot_id=(
                self.time_slot_id if self.time_slot_id is not None else entry.time_slot_id
            ),
            teacher_id=self.teacher_id if self.teacher_id is not None else entry.teacher_id,
            day=self.day if self.day is not None else entry.day,
            start_time=self.start_time if self.start_time is not None else entry.start_time,
            end_time=self.end_time if self.end_time is not None else entry.end_time,
            room_id=self.room_id if self.room_id is not None else entry.room_id,
        )


@dataclass
class Violation:
    """A single categorised reason a placement is not allowed."""

    category: ConflictType
    message: str

    def __str__(self) -> str:
        return f"{self.category.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert violation to dictionary."""
        return {"category": self.category.value, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Violation":
        """Create a Violation from a dictionary."""
        return cls(category=ConflictType(data["category"]), message=data["message"])


@dataclass
class RejectedSlot:
    """A candidate slot that was tried and rejected for an occurrence."""

    slot_id: str
    day: str
    start_time: str
    end_time: str
    violations: list[Violation] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.day} {self.start_time}-{self.end_time}"

    def to_dict(self) -> dict[str, Any]:
        """Convert rejected slot to dictionary."""
        return {
            "slotId": self.slot_id,
            "day": self.day,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "violations": [v.to_dict() for v in self.violations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RejectedSlot":
        """Create a RejectedSlot from a dictionary."""
        return cls(
            slot_id=data["slotId"],
            day=data["day"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            violations=[Violation.from_dict(v) for v in data.get("violations", [])],
        )


@dataclass
class Conflict:
    """A conflict report.

    ``description`` is the rendered prose; ``subject_id``, ``rejected_slots``
    and ``suggestions`` carry the same information in structured form.
    Conflicts from generation leave ``affected_entries`` empty because the
    dropped occurrence has no entry.
    """

    type: str
    description: str
    affected_entries: list[str] = field(default_factory=list)
    subject_id: str | None = None
    rejected_slots: list[RejectedSlot] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def categories(self) -> set[ConflictType]:
        """All violation categories seen across rejected slots."""
        return {v.category for slot in self.rejected_slots for v in slot.violations}

    def to_dict(self) -> dict[str, Any]:
        """Convert conflict to dictionary."""
        return {
            "type": self.type,
            "description": self.description,
            "affectedEntries": list(self.affected_entries),
            "subjectId": self.subject_id,
            "rejectedSlots": [s.to_dict() for s in self.rejected_slots],
            "suggestions": list(self.suggestions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conflict":
        """Create a Conflict from a dictionary."""
        return cls(
            type=data.get("type", SCHEDULING_CONFLICT),
            description=data.get("description", ""),
            affected_entries=list(data.get("affectedEntries") or []),
            subject_id=data.get("subjectId"),
            rejected_slots=[RejectedSlot.from_dict(s) for s in data.get("rejectedSlots") or []],
            suggestions=list(data.get("suggestions") or []),
        )


@dataclass
class GenerationStatistics:
    """Statistics about a generated timetable."""

    total_required: int = 0
    total_scheduled: int = 0
    total_unscheduled: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    by_teacher: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalRequired": self.total_required,
            "totalScheduled": self.total_scheduled,
            "totalUnscheduled": self.total_unscheduled,
            "byDay": self.by_day,
            "byTeacher": self.by_teacher,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationStatistics":
        """Create statistics from a dictionary."""
        return cls(
            total_required=data.get("totalRequired", 0),
            total_scheduled=data.get("totalScheduled", 0),
            total_unscheduled=data.get("totalUnscheduled", 0),
            by_day=dict(data.get("byDay") or {}),
            by_teacher=dict(data.get("byTeacher") or {}),
        )


@dataclass
class GeneratedTimetable:
    """Result of one generation run."""

    entries: list[TimetableEntry] = field(default_factory=list)
    conflicts: list[Conflict] = field(default_factory=list)
    success: bool = False
    completion_rate: float = 0.0
    statistics: GenerationStatistics = field(default_factory=GenerationStatistics)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "entries": [e.to_dict() for e in self.entries],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "success": self.success,
            "completionRate": self.completion_rate,
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratedTimetable":
        """Create a GeneratedTimetable from a dictionary."""
        return cls(
            entries=[TimetableEntry.from_dict(e) for e in data.get("entries", [])],
            conflicts=[Conflict.from_dict(c) for c in data.get("conflicts", [])],
            success=bool(data.get("success", False)),
            completion_rate=float(data.get("completionRate", 0.0)),
            statistics=GenerationStatistics.from_dict(data.get("statistics") or {}),
        )


@dataclass
class TimetableConfig:
    """Subjects and time slots for one generation run."""

    subjects: list[Subject] = field(default_factory=list)
    time_slots: list[TimeSlot] = field(default_factory=list)

    def get_subject(self, subject_id: str) -> Subject | None:
        """Look up a subject by id."""
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "subjects": [s.to_dict() for s in self.subjects],
            "timeSlots": [t.to_dict() for t in self.time_slots],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimetableConfig":
        """Create a TimetableConfig from a dictionary."""
        return cls(
            subjects=[Subject.from_dict(s) for s in data.get("subjects", [])],
            time_slots=[TimeSlot.from_dict(t) for t in data.get("timeSlots", [])],
        )


@dataclass
class ValidationResult:
    """Outcome of configuration validation."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class TimetableMetadata:
    """Summary numbers stored alongside a saved timetable."""

    total_subjects: int = 0
    total_time_slots: int = 0
    completion_rate: float = 0.0
    conflict_count: int = 0

    @classmethod
    def build(
        cls,
        subjects: list[Subject],
        time_slots: list[TimeSlot],
        generated: GeneratedTimetable,
    ) -> "TimetableMetadata":
        return cls(
            total_subjects=len(subjects),
            total_time_slots=len(time_slots),
            completion_rate=generated.completion_rate,
            conflict_count=len(generated.conflicts),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSubjects": self.total_subjects,
            "totalTimeSlots": self.total_time_slots,
            "completionRate": self.completion_rate,
            "conflictCount": self.conflict_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimetableMetadata":
        return cls(
            total_subjects=data.get("totalSubjects", 0),
            total_time_slots=data.get("totalTimeSlots", 0),
            completion_rate=float(data.get("completionRate", 0.0)),
            conflict_count=data.get("conflictCount", 0),
        )


@dataclass
class SavedTimetable:
    """A persisted timetable with the configuration it was generated from."""

    id: str
    name: str
    subjects: list[Subject]
    time_slots: list[TimeSlot]
    generated_timetable: GeneratedTimetable
    description: str | None = None
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())
    metadata: TimetableMetadata = field(default_factory=TimetableMetadata)

    def get_subject(self, subject_id: str) -> Subject | None:
        """Look up a subject by id."""
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "subjects": [s.to_dict() for s in self.subjects],
            "timeSlots": [t.to_dict() for t in self.time_slots],
            "generatedTimetable": self.generated_timetable.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedTimetable":
        """Create a SavedTimetable from a dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description"),
            subjects=[Subject.from_dict(s) for s in data.get("subjects", [])],
            time_slots=[TimeSlot.from_dict(t) for t in data.get("timeSlots", [])],
            generated_timetable=GeneratedTimetable.from_dict(
                data.get("generatedTimetable") or {}
            ),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
            metadata=TimetableMetadata.from_dict(data.get("metadata") or {}),
        )
