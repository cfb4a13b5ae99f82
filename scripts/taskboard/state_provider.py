"""
SnapshotProvider implementation that reads a JSON state file.

The task engine writes its current snapshot set to the file each tick;
this module validates and converts it to TaskSnapshot values.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from jsonschema import SchemaError, ValidationError, validate

from taskboard.providers import StateSnapshot, TaskSnapshot, TaskStatus

logger = logging.getLogger(__name__)

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"
STATE_SCHEMA = SCHEMAS_DIR / "state.schema.json"

# Read from the working directory when no path is given
DEFAULT_STATE_FILE = Path("taskboard-state.json")


def _parse_datetime(s: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None


def validate_state(data: dict) -> tuple[bool, str]:
    """Validate state data against the schema. Returns (valid, error_message)."""
    try:
        schema = json.loads(STATE_SCHEMA.read_text())
        validate(instance=data, schema=schema)
    except SchemaError as e:
        return False, f"Invalid schema: {e.message}"
    except ValidationError as e:
        path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        return False, f"Validation error at '{path}': {e.message}"

    seen = set()
    for task in data.get("tasks", []):
        if task["title"] in seen:
            return False, f"Duplicate task title: {task['title']!r}"
        seen.add(task["title"])
    return True, ""


def task_from_dict(data: dict) -> TaskSnapshot:
    """Convert a task dict to TaskSnapshot."""
    return TaskSnapshot(
        title=data["title"],
        status=TaskStatus(data["status"]),
        count=data.get("count", 0),
        success=data.get("success", 0),
        skip=data.get("skip", 0),
        error=data.get("error", 0),
        code_errors_count=data.get("code_errors_count", 0),
        duration=data.get("duration", 0.0),
        estimated_duration=data.get("estimated_duration", 0.0),
        progress_percent=data.get("progress_percent", 0.0),
        memory_usage=data.get("memory_usage", 0),
        memory_peak=data.get("memory_peak", 0),
        message=data.get("message", ""),
        finished_at=_parse_datetime(data.get("finished_at")),
        dependencies=tuple(data.get("dependencies", [])),
    )


class FileSnapshotProvider:
    """Loads snapshot sets from a JSON state file."""

    def __init__(self, state_file: Path | None = None) -> None:
        if state_file is None:
            state_file = DEFAULT_STATE_FILE
        self._state_file = Path(state_file)

    @property
    def state_file(self) -> Path:
        return self._state_file

    def load(self) -> StateSnapshot | None:
        """Load the current snapshot set, or None if missing or invalid."""
        if not self._state_file.exists():
            return None

        try:
            data = json.loads(self._state_file.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Cannot read state file %s: %s", self._state_file, e)
            return None

        valid, msg = validate_state(data)
        if not valid:
            logger.warning("Rejected state file %s: %s", self._state_file, msg)
            return None

        tasks = {}
        for task_data in data["tasks"]:
            task = task_from_dict(task_data)
            tasks[task.title] = task

        return StateSnapshot(tasks=tasks, elapsed=data.get("elapsed", 0.0))
