"""Structured styled text, independent of any rendering backend."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Style(Enum):
    """Semantic styles; sinks decide what each one looks like."""

    PLAIN = "plain"
    ACCENT = "accent"
    SUCCESS = "success"
    WARNING = "warning"
    SEVERE = "severe"


@dataclass(frozen=True)
class Span:
    """A run of text carrying one style."""

    text: str
    style: Style = Style.PLAIN


@dataclass(frozen=True)
class StyledText:
    """Sequence of styled spans making up one cell or line."""

    spans: tuple[Span, ...] = ()

    @classmethod
    def of(cls, text: str, style: Style = Style.PLAIN) -> StyledText:
        if not text:
            return cls()
        return cls((Span(text, style),))

    @property
    def plain(self) -> str:
        return "".join(span.text for span in self.spans)

    @property
    def styles(self) -> set[Style]:
        return {span.style for span in self.spans}

    def __add__(self, other: StyledText | str) -> StyledText:
        if isinstance(other, str):
            other = StyledText.of(other)
        return StyledText(self.spans + other.spans)

    def __str__(self) -> str:
        return self.plain

    def join(self, parts: Iterable[StyledText]) -> StyledText:
        """Join parts using self as the separator, like str.join."""
        result = StyledText()
        for i, part in enumerate(parts):
            if i:
                result = result + self
            result = result + part
        return result
