"""Status partitioning and aggregate totals over a snapshot set."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import reduce

from taskboard.errors import UnknownStatusError
from taskboard.providers import SnapshotSet, TaskSnapshot, TaskStatus


def classify_tasks(
    tasks: SnapshotSet,
) -> tuple[dict[str, TaskSnapshot], dict[str, TaskSnapshot], dict[str, TaskSnapshot]]:
    """Split tasks into (stacked, running, done), keeping input order.

    Raises UnknownStatusError for any status outside the lifecycle.
    """
    stacked: dict[str, TaskSnapshot] = {}
    running: dict[str, TaskSnapshot] = {}
    done: dict[str, TaskSnapshot] = {}
    buckets = {
        TaskStatus.STACKED: stacked,
        TaskStatus.RUNNING: running,
        TaskStatus.DONE: done,
    }

    for title, task in tasks.items():
        try:
            status = TaskStatus(task.status)
        except ValueError:
            raise UnknownStatusError(title, task.status) from None
        buckets[status][title] = task

    return stacked, running, done


@dataclass(frozen=True)
class Totals:
    """Sums over running and finished tasks."""

    count: int = 0
    success: int = 0
    skip: int = 0
    error: int = 0
    code_errors: int = 0
    duration: float = 0.0
    memory_peak: int = 0
    task_count: int = 0
    time_saved: float = 0.0

    @property
    def avg_peak_memory(self) -> int:
        if self.task_count == 0:
            return 0
        return self.memory_peak // self.task_count

    def add(self, task: TaskSnapshot) -> "Totals":
        return Totals(
            count=self.count + task.count,
            success=self.success + task.success,
            skip=self.skip + task.skip,
            error=self.error + task.error,
            code_errors=self.code_errors + task.code_errors_count,
            duration=self.duration + task.duration,
            memory_peak=self.memory_peak + task.memory_peak,
            task_count=self.task_count + 1,
        )


def aggregate(tasks: Iterable[TaskSnapshot], elapsed: float) -> Totals:
    """Fold tasks into Totals; time_saved is summed duration minus wall time.

    Callers pass running and done tasks only; stacked tasks have no work
    to account for yet.
    """
    totals = reduce(Totals.add, tasks, Totals())
    return replace(totals, time_saved=max(totals.duration - elapsed, 0.0))
