"""
Output sinks backed by rich.

ConsoleSink writes to a terminal, overwriting a Live region when the
console is interactive and falling back to clear-and-print otherwise.
BufferSink keeps everything in memory.
"""

from __future__ import annotations

import io

from rich.console import Console, Group
from rich.live import Live
from rich.table import Table
from rich.text import Text

from taskboard.providers import Frame, Separator, TableView
from taskboard.styles import Style, StyledText

STYLE_MAP = {
    Style.PLAIN: "",
    Style.ACCENT: "cyan",
    Style.SUCCESS: "green",
    Style.WARNING: "yellow",
    Style.SEVERE: "red",
}


def to_rich_text(text: StyledText) -> Text:
    return Text.assemble(*((span.text, STYLE_MAP[span.style]) for span in text.spans))


def to_rich_table(view: TableView) -> Table:
    table = Table(show_header=True, header_style="bold")
    for column in view.columns:
        table.add_column(column.header, justify=column.justify, max_width=column.max_width)

    for row in view.rows:
        if isinstance(row, Separator):
            table.add_section()
            continue
        table.add_row(*(to_rich_text(cell) for cell in row))
    return table


def to_renderable(frame: Frame) -> Group:
    return Group(*(to_rich_table(view) for view in frame.tables))


class ConsoleSink:
    """Terminal sink using a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._live: Live | None = None

    @property
    def supports_regions(self) -> bool:
        return self.console.is_terminal

    def overwrite(self, frame: Frame) -> None:
        renderable = to_renderable(frame)
        if self._live is None:
            self._live = Live(
                renderable,
                console=self.console,
                auto_refresh=False,
                transient=False,
            )
            self._live.start()
        self._live.update(renderable, refresh=True)

    def clear_and_print(self, frame: Frame) -> None:
        self.console.clear()
        self.console.print(to_renderable(frame))

    def notice(self, text: StyledText) -> None:
        self.console.print(to_rich_text(text))

    def close(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None


class BufferSink:
    """In-memory sink recording every frame and notice."""

    def __init__(self, supports_regions: bool = True, width: int = 200) -> None:
        self.supports_regions = supports_regions
        self.width = width
        self.writes: list[tuple[str, Frame]] = []
        self.notices: list[StyledText] = []
        self.closed = 0

    def overwrite(self, frame: Frame) -> None:
        self.writes.append(("overwrite", frame))

    def clear_and_print(self, frame: Frame) -> None:
        self.writes.append(("clear_and_print", frame))

    def notice(self, text: StyledText) -> None:
        self.notices.append(text)

    def close(self) -> None:
        self.closed += 1

    @property
    def frames(self) -> list[Frame]:
        return [frame for _, frame in self.writes]

    def render(self, frame: Frame) -> str:
        """Plain-text rendering of a frame, without color codes."""
        output = io.StringIO()
        console = Console(file=output, width=self.width, color_system=None, force_terminal=False)
        console.print(to_renderable(frame))
        return output.getvalue()
