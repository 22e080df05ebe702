"""Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stackcalc.source import Span


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# Diagnostic codes by pipeline stage
LEXICAL = "E100"
SYNTAX = "E200"
CODEGEN = "E300"
RUNTIME = "E400"

# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str = ""


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def make_error(code: str, message: str, span: Span | None = None) -> Diagnostic:
    """Build an error diagnostic from a message and an optional span."""
    labels = [DiagnosticLabel(span)] if span is not None else []
    return Diagnostic(Severity.ERROR, code, message, labels)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic, source: str, filename: str = "<input>") -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]
        # Lines end at "\n" only, as in Span's line and column numbers
        source_lines = source.split("\n")

        # Header: error[E200]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            line_num = span.starting_line_number(source)
            col = span.starting_column_number(source)
            loc = f"{filename}:{line_num}:{col}"
            if span.is_empty:
                # Only EOF tokens have empty spans
                loc += " (end of input)"
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {loc}")
            gutter = f"{line_num:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            line_text = source_lines[line_num - 1].removesuffix("\r")
            lines.append(
                f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {line_text}"
            )

            # Multi-line spans are underlined up to the end of the first line
            caret_len = max(1, min(len(span), len(line_text) - col + 1))
            padding = " " * (col - 1)
            carets = "^" * caret_len
            lines.append(
                f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                f"{padding}{self._c(color)}{carets}{self._c(_RESET)}"
            )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class CompileError(Exception):
    """Batch compilation error carrying multiple diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")
