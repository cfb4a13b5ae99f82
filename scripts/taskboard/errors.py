"""Error types raised by the dashboard."""


class TaskboardError(ValueError):
    """Base class for invalid dashboard input."""


class UnknownStatusError(TaskboardError):
    """A snapshot carries a status outside stacked/running/done."""

    def __init__(self, title: str, status: object) -> None:
        super().__init__(f"Task {title!r} has unknown status {status!r}")
        self.title = title
        self.status = status
