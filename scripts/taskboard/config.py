"""Dashboard configuration."""

from dataclasses import dataclass

# Minimum seconds between two full redraws
THROTTLE_INTERVAL = 0.1

# Cells in a progress bar
BAR_WIDTH = 20

# Max width of the Message column
MESSAGE_WIDTH = 24


@dataclass(frozen=True)
class DashboardConfig:
    """Rendering options supplied by the owning task engine.

    done_rows: how many finished tasks stay visible. None shows all of them,
    0 shows only failures, K shows failures plus the K most recent.
    verbose: render the dependency wait table above the main table.
    """

    done_rows: int | None = None
    verbose: bool = False
    throttle_interval: float = THROTTLE_INTERVAL
    bar_width: int = BAR_WIDTH
    message_width: int = MESSAGE_WIDTH

    def __post_init__(self) -> None:
        if self.done_rows is not None and self.done_rows < 0:
            raise ValueError(f"done_rows must be >= 0, got {self.done_rows}")
        if self.bar_width <= 0:
            raise ValueError(f"bar_width must be positive, got {self.bar_width}")
