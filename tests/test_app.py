"""Tests for app.py - the Textual viewer polling loop."""

import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from taskboard.app import TaskboardApp  # noqa: E402

# Long enough that only on_mount and explicit refreshes poll
POLL_INTERVAL = 60.0


def write_state(path: Path, *statuses: str) -> None:
    tasks = [
        {"title": f"task-{i}", "status": status, "count": 1, "success": 1}
        for i, status in enumerate(statuses)
    ]
    path.write_text(json.dumps({"elapsed": 5.0, "tasks": tasks}))


def last_notice(app: TaskboardApp) -> str:
    return app.dashboard.sink.last_notice.plain


class TestTaskboardApp:
    """Tests for TaskboardApp state polling."""

    def test_finishes_when_all_tasks_done(self, tmp_path: Path) -> None:
        state_file = tmp_path / "state.json"
        write_state(state_file, "done", "done")
        app = TaskboardApp(state_file=state_file, poll_interval=POLL_INTERVAL)

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.run_finished
                assert last_notice(app).startswith("[OK] Parallel task processing finished")

        asyncio.run(scenario())

    def test_keeps_polling_while_tasks_run(self, tmp_path: Path) -> None:
        state_file = tmp_path / "state.json"
        write_state(state_file, "done", "running")
        app = TaskboardApp(state_file=state_file, poll_interval=POLL_INTERVAL)

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                assert not app.run_finished
                assert last_notice(app).startswith("[INFO]")

        asyncio.run(scenario())

    def test_missing_state_shows_error(self, tmp_path: Path) -> None:
        state_file = tmp_path / "missing.json"
        app = TaskboardApp(state_file=state_file, poll_interval=POLL_INTERVAL)

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                assert not app.run_finished
                assert last_notice(app) == f"[ERROR] No valid state found at {state_file}"

        asyncio.run(scenario())

    def test_refresh_resumes_after_finish(self, tmp_path: Path) -> None:
        state_file = tmp_path / "state.json"
        write_state(state_file, "done")
        app = TaskboardApp(state_file=state_file, poll_interval=POLL_INTERVAL)

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.run_finished

                write_state(state_file, "done", "running")
                await pilot.press("r")
                await pilot.pause()

                assert not app.run_finished

        asyncio.run(scenario())
