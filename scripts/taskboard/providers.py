"""
Data model and collaborator protocols for the dashboard.

Protocols define the interface; implementations can be swapped
for testing or alternative backends.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol, Union

from taskboard.styles import StyledText


class TaskStatus(str, Enum):
    """Lifecycle position of a task. Only moves forward."""

    STACKED = "stacked"
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class TaskSnapshot:
    """Immutable point-in-time view of one task."""

    title: str
    status: TaskStatus
    count: int = 0
    success: int = 0
    skip: int = 0
    error: int = 0
    code_errors_count: int = 0
    duration: float = 0.0
    estimated_duration: float = 0.0
    progress_percent: float = 0.0
    memory_usage: int = 0
    memory_peak: int = 0
    message: str = ""
    finished_at: datetime | None = None
    dependencies: tuple[str, ...] = ()


# Ordered title -> snapshot mapping, fresh each polling tick
SnapshotSet = Mapping[str, TaskSnapshot]


@dataclass(frozen=True)
class StateSnapshot:
    """Snapshot set plus the run's elapsed wall-clock seconds."""

    tasks: dict[str, TaskSnapshot]
    elapsed: float = 0.0


@dataclass(frozen=True)
class Separator:
    """Horizontal rule between row groups."""


SEPARATOR = Separator()

Row = Union[tuple[StyledText, ...], Separator]


@dataclass(frozen=True)
class Column:
    header: str
    max_width: int | None = None
    justify: str = "left"


@dataclass(frozen=True)
class TableView:
    """Backend-agnostic table: column specs and styled rows."""

    columns: tuple[Column, ...]
    rows: tuple[Row, ...] = ()


@dataclass(frozen=True)
class Frame:
    """One complete render pass, handed to a sink in a single call."""

    tables: tuple[TableView, ...]
    ambiguous: tuple[str, ...] = ()

    @property
    def main_table(self) -> TableView:
        return self.tables[-1]

    @property
    def wait_table(self) -> TableView | None:
        return self.tables[0] if len(self.tables) > 1 else None


class OutputSink(Protocol):
    """Protocol for where composed frames and notices are written."""

    supports_regions: bool

    def overwrite(self, frame: Frame) -> None:
        """Replace the previously written region with this frame."""
        ...

    def clear_and_print(self, frame: Frame) -> None:
        """Clear the screen and print this frame."""
        ...

    def notice(self, text: StyledText) -> None:
        """Print a one-line lifecycle message."""
        ...

    def close(self) -> None:
        """Release any live region held by the sink."""
        ...


class SnapshotProvider(Protocol):
    """Protocol for obtaining the current task snapshot set."""

    def load(self) -> StateSnapshot | None:
        """Load the current snapshot set, or None if unavailable."""
        ...
