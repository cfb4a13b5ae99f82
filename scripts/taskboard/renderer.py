"""
Table dashboard renderer.

Turns a snapshot set into a wait table (stacked tasks and what they are
blocked on) and a main stats table, and hands the finished frame to an
output sink.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping

from taskboard.aggregate import Totals, aggregate, classify_tasks
from taskboard.config import DashboardConfig
from taskboard.formatting import (
    Outcome,
    classify_outcome,
    format_clock,
    format_memory,
    format_number,
    format_time,
    format_title,
    progress_bar,
)
from taskboard.providers import (
    SEPARATOR,
    Column,
    Frame,
    OutputSink,
    Row,
    SnapshotSet,
    TableView,
    TaskSnapshot,
)
from taskboard.styles import Style, StyledText
from taskboard.throttle import RateLimiter

logger = logging.getLogger(__name__)

WAIT_SEPARATOR = StyledText.of(" | ", Style.WARNING)

START_MESSAGE = "Starting parallel task processing ..."
FINISH_MESSAGE = "Parallel task processing finished in {duration}"


def _text(value: str) -> StyledText:
    return StyledText.of(value)


def render_wait_rows(
    stacked: Mapping[str, TaskSnapshot],
    running: Mapping[str, TaskSnapshot],
) -> list[Row]:
    """One (title, waiting-for) row per stacked task.

    Dependencies that are currently running are highlighted.
    """
    rows: list[Row] = []
    for title, task in stacked.items():
        waiting_for = [
            StyledText.of(dep, Style.ACCENT if dep in running else Style.PLAIN)
            for dep in task.dependencies
        ]
        rows.append((format_title(title, task), WAIT_SEPARATOR.join(waiting_for)))
    return rows


def visible_done_tasks(
    done: Mapping[str, TaskSnapshot],
    done_rows: int | None,
) -> dict[str, TaskSnapshot]:
    """Finished tasks to show: every failure plus the last done_rows tasks."""
    total = len(done)
    visible = {}
    for i, (title, task) in enumerate(done.items(), start=1):
        remaining = total - i
        if (
            task.error > 0
            or done_rows is None
            or (done_rows > 0 and remaining < done_rows)
        ):
            visible[title] = task
    return visible


class TableDashboard:
    """Throttled table renderer driven once per polling tick."""

    WAIT_COLUMNS = (Column("Title"), Column("Waiting for"))

    def __init__(
        self,
        sink: OutputSink,
        config: DashboardConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sink = sink
        self.config = config or DashboardConfig()
        self.clock = clock
        self.limiter = RateLimiter(self.config.throttle_interval)
        self.main_columns = (
            Column("Task"),
            Column("All", justify="right"),
            Column("OK", justify="right"),
            Column("SKP", justify="right"),
            Column("ERR", justify="right"),
            Column("WRN", justify="right"),
            Column("Progress"),
            Column("Time"),
            Column("Memory"),
            Column("Message", max_width=self.config.message_width),
        )

    def start_message(self) -> None:
        self.sink.notice(StyledText.of(f"[INFO] {START_MESSAGE}", Style.ACCENT))

    def error_message(self, error: str) -> None:
        self.sink.notice(StyledText.of(f"[ERROR] {error}", Style.SEVERE))

    def print_to_output(self, tasks: SnapshotSet, elapsed: float) -> Frame | None:
        """Render and write a frame, unless the last one was too recent.

        Returns the frame written, or None when throttled.
        """
        if not self.limiter.should_render(self.clock()):
            logger.debug("Skipping render inside throttle window")
            return None

        frame = self.build_frame(tasks, elapsed)
        if self.sink.supports_regions:
            self.sink.overwrite(frame)
        else:
            self.sink.clear_and_print(frame)
        self.limiter.mark_rendered(self.clock())
        return frame

    def finish_message(self, tasks: SnapshotSet, duration: float) -> Frame | None:
        """Force a final render, then announce completion."""
        self.limiter.reset()
        frame = self.print_to_output(tasks, duration)
        self.sink.close()
        if frame is not None and frame.ambiguous:
            logger.warning(
                "Finished tasks with no errors whose success+skip differs from count: %s",
                ", ".join(frame.ambiguous),
            )
        self.sink.notice(
            StyledText.of(
                "[OK] " + FINISH_MESSAGE.format(duration=format_time(duration)),
                Style.SUCCESS,
            )
        )
        return frame

    def build_frame(self, tasks: SnapshotSet, elapsed: float) -> Frame:
        """Compose both tables for one pass. Has no side effects on the sink."""
        stacked, running, done = classify_tasks(tasks)
        totals = aggregate([*done.values(), *running.values()], elapsed)

        tables = []
        if self.config.verbose and stacked:
            tables.append(
                TableView(self.WAIT_COLUMNS, tuple(render_wait_rows(stacked, running)))
            )

        rows: list[Row] = []
        rows.extend(self._done_rows(done, totals.avg_peak_memory))
        rows.extend(self._running_rows(running, totals.avg_peak_memory))
        rows.append(self._total_row(totals, len(done), len(tasks), elapsed))
        tables.append(TableView(self.main_columns, tuple(rows)))

        ambiguous = tuple(
            title
            for title, task in done.items()
            if classify_outcome(task) is Outcome.AMBIGUOUS
        )
        if ambiguous:
            logger.debug("Ambiguous outcomes this pass: %s", ", ".join(ambiguous))

        return Frame(tables=tuple(tables), ambiguous=ambiguous)

    def _counter_cells(self, task: TaskSnapshot) -> tuple[StyledText, ...]:
        return tuple(
            _text(format_number(value))
            for value in (
                task.count,
                task.success,
                task.skip,
                task.error,
                task.code_errors_count,
            )
        )

    def _done_rows(
        self, done: Mapping[str, TaskSnapshot], avg_peak_memory: int
    ) -> list[Row]:
        rows: list[Row] = []
        for title, task in visible_done_tasks(done, self.config.done_rows).items():
            message = ""
            if task.finished_at is not None:
                message = f"Finished at: {format_clock(task.finished_at)}"
            if task.error and task.message:
                message += f". {task.message}"

            rows.append((
                format_title(title, task),
                *self._counter_cells(task),
                progress_bar(task.progress_percent, self.config.bar_width),
                _text(format_time(task.duration)),
                format_memory(task, avg_peak_memory),
                _text(message),
            ))

        if done:
            rows.append(SEPARATOR)
        return rows

    def _running_rows(
        self, running: Mapping[str, TaskSnapshot], avg_peak_memory: int
    ) -> list[Row]:
        rows: list[Row] = []
        for title, task in running.items():
            rows.append((
                format_title(title, task),
                *self._counter_cells(task),
                progress_bar(task.progress_percent, self.config.bar_width),
                _text(
                    f"{format_time(task.duration)}/{format_time(task.estimated_duration)}"
                ),
                format_memory(task, avg_peak_memory),
                _text(task.message),
            ))

        if running:
            rows.append(SEPARATOR)
        return rows

    def _total_row(
        self, totals: Totals, done_count: int, all_count: int, elapsed: float
    ) -> Row:
        return (
            _text(f"Total ({done_count}/{all_count})"),
            _text(format_number(totals.count)),
            _text(format_number(totals.success)),
            _text(format_number(totals.skip)),
            _text(format_number(totals.error)),
            _text(format_number(totals.code_errors)),
            _text(f"Saved time: {format_time(totals.time_saved)}"),
            _text(format_time(elapsed)),
            StyledText(),
            StyledText(),
        )
