"""
Taskboard - live terminal dashboard for parallel task execution.

Architecture:
- providers.py: Snapshot data model and sink/provider protocols
- formatting.py, aggregate.py, throttle.py: Pure building blocks
- renderer.py: Composes frames and hands them to a sink
- sinks.py: rich-backed output sinks
- app.py: Optional Textual viewer for a JSON state file

Extensibility points:
1. New output backends: Implement the OutputSink protocol
2. New data sources: Implement the SnapshotProvider protocol
"""

from taskboard.config import DashboardConfig
from taskboard.errors import TaskboardError, UnknownStatusError
from taskboard.providers import TaskSnapshot, TaskStatus
from taskboard.renderer import Frame, TableDashboard

__all__ = [
    "DashboardConfig",
    "Frame",
    "TableDashboard",
    "TaskSnapshot",
    "TaskStatus",
    "TaskboardError",
    "UnknownStatusError",
]
