"""Configuration loading from JSON files."""

import json
import logging
from pathlib import Path

from .exceptions import ConfigurationError
from .models import Subject, TimeSlot, TimetableConfig
from .scheduler.utils import generate_default_time_slots

logger = logging.getLogger(__name__)


def load_config(input_path: Path | str) -> TimetableConfig:
    """Load a configuration document.

    Expected shape: ``{"subjects": [...], "timeSlots": [...]}``. A document
    without ``timeSlots`` gets the default week of slots.

    Args:
        input_path: Path to the JSON file

    Returns:
        TimetableConfig
    """
    path = Path(input_path)
    if not path.exists():
        raise ConfigurationError("file not found", path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid JSON ({e})", path) from e

    if not isinstance(data, dict):
        raise ConfigurationError("expected a JSON object", path)

    try:
        subjects = [Subject.from_dict(s) for s in data.get("subjects", [])]
        if "timeSlots" in data:
            time_slots = [TimeSlot.from_dict(t) for t in data["timeSlots"]]
        else:
            logger.info("No time slots in configuration, using default slots")
            time_slots = generate_default_time_slots()
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"malformed record ({e})", path) from e

    logger.info(f"Loaded {len(subjects)} subjects and {len(time_slots)} time slots from {path}")
    return TimetableConfig(subjects=subjects, time_slots=time_slots)


def save_config(config: TimetableConfig, output_path: Path | str) -> None:
    """Write a configuration document.

    Args:
        config: Configuration to write
        output_path: Path to output JSON file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, ensure_ascii=False, indent=2)
