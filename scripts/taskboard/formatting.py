"""Cell formatters: progress bars, titles, memory, time and byte units."""

import math
from datetime import datetime
from enum import Enum

from taskboard.config import BAR_WIDTH
from taskboard.providers import TaskSnapshot, TaskStatus
from taskboard.styles import Style, StyledText

# Progress bar glyphs
FULL_BLOCK = "█"
THREE_QUARTER_BLOCK = "▛"
HALF_BLOCK = "▌"
QUARTER_BLOCK = "▘"
EMPTY_CELL = "·"

# Title markers
SUCCESS_MARK = "✔"
FAILURE_MARK = "✖"

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


class Outcome(Enum):
    """Per-render outcome of a task, derived from its counters."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED_HARD = "failed_hard"
    FAILED_CODE = "failed_code"
    AMBIGUOUS = "ambiguous"


def format_time(seconds: float) -> str:
    """Format a number of seconds as '45s', '5m 30s' or '2h 15m'."""
    total_seconds = max(int(seconds), 0)
    if total_seconds < 60:
        return f"{total_seconds}s"
    elif total_seconds < 3600:
        return f"{total_seconds // 60}m {total_seconds % 60}s"
    hours = total_seconds // 3600
    mins = (total_seconds % 3600) // 60
    return f"{hours}h {mins}m"


def format_clock(moment: datetime | None) -> str:
    if moment is None:
        return ""
    return moment.strftime("%H:%M:%S")


def format_number(value: float) -> str:
    """Round half up and add thousands separators."""
    return f"{math.floor(value + 0.5):,}"


def convert_bytes(size: int) -> str:
    """Human-readable byte size, e.g. '512 B', '1.5 MB'."""
    value = float(max(size, 0))
    unit = 0
    while value >= 1024 and unit < len(BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {BYTE_UNITS[unit]}"


def progress_bar(percent: float, width: int = BAR_WIDTH) -> StyledText:
    """Fixed-width bar with a quarter-resolution last cell and a % label."""
    percent = min(max(percent, 0.0), 100.0)
    fill = percent / 100 * width
    full_cells = math.floor(fill)
    frac = fill - full_cells

    if frac >= 0.66:
        partial = THREE_QUARTER_BLOCK
    elif frac >= 0.33:
        partial = HALF_BLOCK
    elif frac > 0:
        partial = QUARTER_BLOCK
    else:
        partial = ""

    bar = FULL_BLOCK * full_cells + partial
    dots = EMPTY_CELL * (width - full_cells - len(partial))
    label = f"{format_number(percent):>5}%"
    return StyledText.of(bar, Style.ACCENT) + StyledText.of(dots) + StyledText.of(label)


def classify_outcome(task: TaskSnapshot) -> Outcome:
    # Order matters: data errors outrank code errors, which outrank success.
    if task.status != TaskStatus.DONE:
        return Outcome.PENDING
    if task.error > 0:
        return Outcome.FAILED_HARD
    if task.code_errors_count > 0:
        return Outcome.FAILED_CODE
    if task.success + task.skip == task.count:
        return Outcome.SUCCEEDED
    return Outcome.AMBIGUOUS


def format_title(title: str, task: TaskSnapshot) -> StyledText:
    """Title cell, marked and colored by the task's outcome."""
    outcome = classify_outcome(task)
    if outcome is Outcome.FAILED_HARD:
        return StyledText.of(f"{FAILURE_MARK} {title}", Style.SEVERE)
    if outcome is Outcome.FAILED_CODE:
        return StyledText.of(f"{FAILURE_MARK} {title}", Style.WARNING)
    if outcome is Outcome.SUCCEEDED:
        return StyledText.of(f"{SUCCESS_MARK} {title}", Style.SUCCESS)
    return StyledText.of(title)


def memory_index(memory_peak: int, avg_peak_memory: int) -> float:
    if avg_peak_memory <= 0:
        return 0.0
    return memory_peak / avg_peak_memory


def format_memory(task: TaskSnapshot, avg_peak_memory: int) -> StyledText:
    """'usage/peak' text, highlighted when the peak is far above average."""
    index = memory_index(task.memory_peak, avg_peak_memory)
    text = f"{convert_bytes(task.memory_usage)}/{convert_bytes(task.memory_peak)}"

    if index > 3:
        return StyledText.of(text, Style.SEVERE)
    elif index > 2:
        return StyledText.of(text, Style.WARNING)
    return StyledText.of(text)
