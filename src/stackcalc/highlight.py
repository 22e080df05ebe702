"""Pygments lexer for the stackcalc expression language."""

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer
from pygments.token import (
    Error,
    Number,
    Operator,
    Punctuation,
    Text,
)


class StackCalcLexer(RegexLexer):
    """Pygments lexer for the stackcalc expression language."""

    name = "StackCalc"
    aliases = ["stackcalc"]
    filenames = ["*.calc"]
    mimetypes = ["text/x-stackcalc"]

    tokens = {
        "root": [
            # Whitespace
            (r"[ \t\n\r\f]+", Text),
            # Numbers (a trailing '.' is not part of the literal)
            (r"[0-9]+\.[0-9]+", Number.Float),
            (r"[0-9]+", Number.Integer),
            # Operators
            (r"[+\-*/%]", Operator),
            # Punctuation
            (r"[();]", Punctuation),
            # Anything else is rejected by the language lexer
            (r".", Error),
        ],
    }


def highlight_source(source: str, *, color: bool = True) -> str:
    """Return *source* with ANSI syntax colouring, or unchanged if not *color*."""
    if not color:
        return source
    return highlight(source, StackCalcLexer(), TerminalFormatter()).rstrip("\n")
