"""Source spans for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A half-open ``[start, end)`` range of offsets into the source text."""

    start: int
    end: int

    @classmethod
    def between(cls, first: Span, last: Span) -> Span:
        """Span from the start of *first* to the end of *last*."""
        return cls(first.start, last.end)

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end == self.start

    def slice(self, source: str) -> str:
        return source[self.start:self.end]

    def starting_line_number(self, source: str) -> int:
        """Return the 1-indexed line on which the span begins."""
        return source.count("\n", 0, self.start) + 1

    def starting_column_number(self, source: str) -> int:
        """Return the 1-indexed column on which the span begins."""
        line_start = source.rfind("\n", 0, self.start) + 1
        return self.start - line_start + 1

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
