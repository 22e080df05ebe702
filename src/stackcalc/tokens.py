"""Token kinds and token representation for the stackcalc lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from stackcalc.source import Span


class TokenKind(Enum):
    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    SEMICOLON = auto()

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Special
    DUMMY = auto()  # placeholder before the parser reads its first token
    EOF = auto()

    @property
    def is_uniform(self) -> bool:
        """True if every token of this kind has the same lexeme."""
        return self is not TokenKind.NUMBER

    def __str__(self) -> str:
        text = _DISPLAY[self]
        if self.is_uniform and self not in (TokenKind.EOF, TokenKind.DUMMY):
            return f"'{text}'"
        return text


_DISPLAY: dict[TokenKind, str] = {
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.SEMICOLON: ";",
    TokenKind.NUMBER: "<number>",
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.PERCENT: "%",
    TokenKind.DUMMY: "<dummy>",
    TokenKind.EOF: "<eof>",
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span

    @classmethod
    def dummy(cls) -> Token:
        return cls(TokenKind.DUMMY, "", Span(0, 0))
