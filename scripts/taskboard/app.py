"""
Taskboard TUI Application.

Polls a JSON state file and shows the table dashboard in a Textual screen.
"""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from taskboard.config import DashboardConfig
from taskboard.errors import TaskboardError
from taskboard.providers import Frame, TaskStatus
from taskboard.renderer import TableDashboard
from taskboard.sinks import to_renderable, to_rich_text
from taskboard.state_provider import FileSnapshotProvider
from taskboard.styles import StyledText

# State file polling interval in seconds
AUTO_REFRESH_INTERVAL = 0.5


class WidgetSink:
    """Sink that redraws a Static widget in place."""

    supports_regions = True

    def __init__(self, board: Static, status: Static) -> None:
        self._board = board
        self._status = status
        self.last_notice: StyledText | None = None

    def overwrite(self, frame: Frame) -> None:
        self._board.update(to_renderable(frame))

    def clear_and_print(self, frame: Frame) -> None:
        self.overwrite(frame)

    def notice(self, text: StyledText) -> None:
        self.last_notice = text
        self._status.update(to_rich_text(text))

    def close(self) -> None:
        pass


class TaskboardApp(App):
    """Live view of a task engine's state file."""

    TITLE = "Taskboard"
    SUB_TITLE = "Parallel Task Monitor"

    CSS = """
    Screen {
        background: $surface;
    }

    #board {
        padding: 0 1;
    }

    #status {
        height: auto;
        padding: 0 1;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
    ]

    def __init__(
        self,
        state_file: Path | None = None,
        config: DashboardConfig | None = None,
        poll_interval: float = AUTO_REFRESH_INTERVAL,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._provider = FileSnapshotProvider(state_file)
        self._dashboard_config = config or DashboardConfig()
        self._refresh_interval = poll_interval
        self._dashboard: TableDashboard | None = None
        self._run_finished = False

    @property
    def dashboard(self) -> TableDashboard | None:
        return self._dashboard

    @property
    def run_finished(self) -> bool:
        """True once every task is done and the finish notice was shown."""
        return self._run_finished

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll():
            yield Static(id="board")
            yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        sink = WidgetSink(
            self.query_one("#board", Static),
            self.query_one("#status", Static),
        )
        self._dashboard = TableDashboard(sink, self._dashboard_config)
        self._dashboard.start_message()
        self._poll_state()
        self.set_interval(self._refresh_interval, self._poll_state)

    def _poll_state(self) -> None:
        """Load the latest snapshot set and render it."""
        if self._dashboard is None or self._run_finished:
            return

        state = self._provider.load()
        if state is None:
            self._dashboard.error_message(
                f"No valid state found at {self._provider.state_file}"
            )
            return

        try:
            if state.tasks and all(
                task.status == TaskStatus.DONE for task in state.tasks.values()
            ):
                self._run_finished = True
                self._dashboard.finish_message(state.tasks, state.elapsed)
            else:
                self._dashboard.print_to_output(state.tasks, state.elapsed)
        except TaskboardError as e:
            self._dashboard.error_message(str(e))

    def action_refresh(self) -> None:
        """Force a redraw of the current state."""
        if self._dashboard is None:
            return
        self._run_finished = False
        self._dashboard.limiter.reset()
        self._poll_state()


def run(
    state_file: Path | None = None,
    done_rows: int | None = None,
    verbose: bool = False,
) -> None:
    """Run the TUI application."""
    app = TaskboardApp(
        state_file=state_file,
        config=DashboardConfig(done_rows=done_rows, verbose=verbose),
    )
    app.run()


if __name__ == "__main__":
    run()
