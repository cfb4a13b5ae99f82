"""Tests for status partitioning and aggregate totals."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from taskboard.aggregate import Totals, aggregate, classify_tasks  # noqa: E402
from taskboard.errors import TaskboardError, UnknownStatusError  # noqa: E402
from taskboard.providers import TaskSnapshot, TaskStatus  # noqa: E402


@pytest.fixture
def mixed_tasks() -> dict[str, TaskSnapshot]:
    """Tasks in interleaved statuses."""
    statuses = [
        ("T1", TaskStatus.DONE),
        ("T2", TaskStatus.STACKED),
        ("T3", TaskStatus.RUNNING),
        ("T4", TaskStatus.DONE),
        ("T5", TaskStatus.STACKED),
        ("T6", TaskStatus.RUNNING),
        ("T7", TaskStatus.DONE),
    ]
    return {title: TaskSnapshot(title=title, status=status) for title, status in statuses}


class TestClassifyTasks:
    """Tests for classify_tasks function."""

    def test_partitions_preserve_order(self, mixed_tasks: dict) -> None:
        stacked, running, done = classify_tasks(mixed_tasks)

        assert list(stacked) == ["T2", "T5"]
        assert list(running) == ["T3", "T6"]
        assert list(done) == ["T1", "T4", "T7"]

    def test_partitions_are_disjoint_and_complete(self, mixed_tasks: dict) -> None:
        parts = classify_tasks(mixed_tasks)

        assert sum(len(p) for p in parts) == len(mixed_tasks)
        keys = [key for p in parts for key in p]
        assert sorted(keys) == sorted(mixed_tasks)

    def test_empty_input(self) -> None:
        assert classify_tasks({}) == ({}, {}, {})

    def test_accepts_raw_status_strings(self) -> None:
        tasks = {"A": TaskSnapshot(title="A", status="running")}

        _, running, _ = classify_tasks(tasks)

        assert list(running) == ["A"]

    def test_unknown_status_fails_fast(self) -> None:
        tasks = {
            "A": TaskSnapshot(title="A", status=TaskStatus.DONE),
            "B": TaskSnapshot(title="B", status="paused"),
        }

        with pytest.raises(UnknownStatusError) as exc_info:
            classify_tasks(tasks)

        assert exc_info.value.title == "B"
        assert exc_info.value.status == "paused"
        assert isinstance(exc_info.value, TaskboardError)
        assert "'B'" in str(exc_info.value)


class TestAggregate:
    """Tests for aggregate function."""

    def test_empty_is_all_zero(self) -> None:
        totals = aggregate([], elapsed=12.0)

        assert totals == Totals()
        assert totals.avg_peak_memory == 0
        assert totals.time_saved == 0

    def test_sums_counters(self) -> None:
        tasks = [
            TaskSnapshot(
                title="A", status=TaskStatus.DONE, count=10, success=7, skip=1,
                error=2, code_errors_count=1, duration=30,
            ),
            TaskSnapshot(
                title="B", status=TaskStatus.RUNNING, count=5, success=2, skip=1,
                code_errors_count=3, duration=20,
            ),
        ]

        totals = aggregate(tasks, elapsed=20)

        assert totals.count == 15
        assert totals.success == 9
        assert totals.skip == 2
        assert totals.error == 2
        assert totals.code_errors == 4
        assert totals.duration == 50
        assert totals.task_count == 2
        assert totals.time_saved == 30

    def test_avg_peak_memory_is_floored(self) -> None:
        tasks = [
            TaskSnapshot(title="A", status=TaskStatus.DONE, memory_peak=100),
            TaskSnapshot(title="B", status=TaskStatus.DONE, memory_peak=201),
        ]

        assert aggregate(tasks, elapsed=0).avg_peak_memory == 150

    def test_time_saved_never_negative(self) -> None:
        tasks = [TaskSnapshot(title="A", status=TaskStatus.RUNNING, duration=5)]

        assert aggregate(tasks, elapsed=60).time_saved == 0

    def test_accepts_generator(self) -> None:
        tasks = (
            TaskSnapshot(title=str(i), status=TaskStatus.DONE, count=1)
            for i in range(4)
        )

        assert aggregate(tasks, elapsed=0).count == 4
