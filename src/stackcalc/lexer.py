"""Lexer for the stackcalc expression language.

Hands out one token per call to :meth:`Lexer.next_token`; the parser pulls
tokens on demand instead of receiving a pre-built list.
"""

from __future__ import annotations

from stackcalc.source import Span
from stackcalc.tokens import SINGLE_CHAR_TOKENS, Token, TokenKind

_WHITESPACE = frozenset(" \t\n\r\f")
_DIGITS = frozenset("0123456789")


class LexError(Exception):
    """An unexpected character. The character has already been consumed."""

    def __init__(self, message: str, lexeme: str, span: Span) -> None:
        self.message = message
        self.lexeme = lexeme
        self.span = span
        super().__init__(f"{message} at {span}")


class Lexer:
    """Tokenizes stackcalc source code."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.start = 0

    def reset(self) -> None:
        """Restart scanning from the beginning of the source."""
        self.pos = 0
        self.start = 0

    def next_token(self) -> Token:
        """Scan and return the next token.

        Once the input is exhausted every call returns an EOF token with an
        empty span at the end of the source. Raises :class:`LexError` on an
        unexpected character.
        """
        self._skip_whitespace()
        self.start = self.pos

        if self.pos >= len(self.source):
            return self._token(TokenKind.EOF)

        ch = self._advance()
        if ch in SINGLE_CHAR_TOKENS:
            return self._token(SINGLE_CHAR_TOKENS[ch])
        if ch in _DIGITS:
            return self._lex_number()

        raise LexError(f"unexpected character {ch!r}", ch, self._span())

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _span(self) -> Span:
        return Span(self.start, self.pos)

    def _token(self, kind: TokenKind) -> Token:
        return Token(kind, self.source[self.start:self.pos], self._span())

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] in _WHITESPACE:
            self.pos += 1

    # ── Numbers ──────────────────────────────────────────────────

    def _lex_number(self) -> Token:
        while self._peek() in _DIGITS:
            self._advance()

        # Only take the '.' when a digit follows it
        if self._peek() == '.' and self._peek(1) in _DIGITS:
            self._advance()
            while self._peek() in _DIGITS:
                self._advance()

        return self._token(TokenKind.NUMBER)


def tokenize(source: str) -> list[Token | LexError]:
    """Drain a fresh lexer up to and including the first EOF token.

    Lexical errors are returned in place rather than raised.
    """
    lexer = Lexer(source)
    result: list[Token | LexError] = []
    while True:
        try:
            tok = lexer.next_token()
        except LexError as e:
            result.append(e)
            continue
        result.append(tok)
        if tok.kind == TokenKind.EOF:
            return result
