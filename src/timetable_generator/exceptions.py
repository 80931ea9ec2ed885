"""Custom exceptions for the timetable generator."""

from pathlib import Path


class TimetableError(Exception):
    """Base exception for timetable generator errors."""

    pass


class ConfigurationError(TimetableError):
    """Configuration file could not be read or has the wrong shape."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        location = f" in '{self.path}'" if self.path is not None else ""
        super().__init__(f"Invalid configuration{location}: {message}")


class StorageError(TimetableError):
    """Timetable store failed to read or write a record."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} timetable: {reason}")


class TimetableNotFoundError(TimetableError):
    """No saved timetable exists with the given id."""

    def __init__(self, timetable_id: str):
        self.timetable_id = timetable_id
        super().__init__(f"Timetable '{timetable_id}' not found")


class ExportError(TimetableError):
    """Export format is not supported."""

    def __init__(self, format_name: str, available: list[str] | None = None):
        self.format_name = format_name
        self.available = available or []
        message = f"Unknown export format: '{format_name}'"
        if self.available:
            message += f". Available formats: {', '.join(self.available)}"
        super().__init__(message)
