"""Redraw rate limiting."""

from taskboard.config import THROTTLE_INTERVAL


class RateLimiter:
    """Gates full redraws to at most one per interval.

    last_render is None until the first accepted render; reset() puts it
    back so the next call always renders.
    """

    def __init__(self, interval: float = THROTTLE_INTERVAL) -> None:
        self.interval = interval
        self.last_render: float | None = None

    def should_render(self, now: float) -> bool:
        if self.last_render is None:
            return True
        return now - self.last_render >= self.interval

    def mark_rendered(self, now: float) -> None:
        self.last_render = now

    def reset(self) -> None:
        self.last_render = None
