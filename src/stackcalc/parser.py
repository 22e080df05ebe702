"""Parser for the stackcalc expression language.

Pulls tokens from the lexer one at a time and builds an AST using a Pratt
expression parser. Errors are recorded as diagnostics and the parser
resynchronizes at the next ``;``, so :meth:`Parser.parse` always returns an
:class:`Ast`.
"""

from __future__ import annotations

from dataclasses import replace

from stackcalc.ast_nodes import (
    Ast,
    BinaryExpr,
    BinOp,
    BinOpKind,
    Decl,
    Expr,
    NumberExpr,
    Stmt,
    UnaryExpr,
    UnOp,
    UnOpKind,
)
from stackcalc.errors import LEXICAL, SYNTAX, Diagnostic, make_error
from stackcalc.lexer import Lexer, LexError
from stackcalc.source import Span
from stackcalc.tokens import Token, TokenKind

# ── Binding powers for Pratt parser ─────────────────────────────

# (left_bp, right_bp) for infix operators
_INFIX_BP: dict[TokenKind, tuple[int, int]] = {
    TokenKind.PLUS: (1, 2),
    TokenKind.MINUS: (1, 2),
    TokenKind.STAR: (3, 4),
    TokenKind.SLASH: (3, 4),
    TokenKind.PERCENT: (3, 4),
}

_PREFIX_BP = 5  # right bp for unary -

MAX_DEPTH = 256  # nested groups and prefix operators per expression

_BINARY_OPS: dict[TokenKind, BinOpKind] = {
    TokenKind.PLUS: BinOpKind.ADD,
    TokenKind.MINUS: BinOpKind.SUB,
    TokenKind.STAR: BinOpKind.MUL,
    TokenKind.SLASH: BinOpKind.DIV,
    TokenKind.PERCENT: BinOpKind.REM,
}

_UNARY_OPS: dict[TokenKind, UnOpKind] = {
    TokenKind.MINUS: UnOpKind.NEG,
}


class Parser:
    """Parses stackcalc source into an AST."""

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.lexer = Lexer(source)
        self.current = Token.dummy()
        self.previous = Token.dummy()
        self.diagnostics: list[Diagnostic] = []
        self.had_error = False
        self._depth = 0
        # Prime the lookahead before any parsing runs
        self._advance()

    # ── Token access ─────────────────────────────────────────────

    def _at(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def _advance(self) -> Token:
        """Consume the current token and pull the next one from the lexer.

        Lexical errors are recorded and skipped; the lexer has already moved
        past the offending character.
        """
        self.previous = self.current
        while True:
            try:
                self.current = self.lexer.next_token()
                return self.previous
            except LexError as e:
                self._report(LEXICAL, e.message, e.span)

    def _expect(self, kind: TokenKind) -> Token:
        if self.current.kind == kind:
            return self._advance()
        tok = self.current
        self._error(f"expected {kind}, got {tok.kind}", tok.span)
        raise _ParseError

    def _report(self, code: str, message: str, span: Span) -> None:
        self.had_error = True
        self.diagnostics.append(make_error(code, message, span))

    def _error(self, message: str, span: Span) -> None:
        self._report(SYNTAX, message, span)

    def _synchronize(self) -> None:
        """Skip tokens until a ';' has been consumed or EOF is reached."""
        while not self._at(TokenKind.EOF):
            if self._at(TokenKind.SEMICOLON):
                self._advance()
                return
            self._advance()

    # ── Top-level parsing ────────────────────────────────────────

    def parse(self) -> Ast:
        """Parse the entire source into an Ast."""
        decls: list[Decl] = []

        while not self._at(TokenKind.EOF):
            try:
                decls.append(self._parse_declaration())
            except _ParseError:
                self._synchronize()

        return Ast(decls=decls, complete=not self.had_error)

    def _parse_declaration(self) -> Decl:
        stmt = self._parse_statement()
        return Decl(stmt, stmt.span)

    def _parse_statement(self) -> Stmt:
        expr = self._parse_expression(0)
        semi = self._expect(TokenKind.SEMICOLON)
        return Stmt(expr, Span.between(expr.span, semi.span))

    # ── Pratt expression parser ──────────────────────────────────

    def _parse_expression(self, min_bp: int) -> Expr:
        """Parse an expression using Pratt parsing with binding powers."""
        if self._depth >= MAX_DEPTH:
            self._error("expression nested too deeply", self.current.span)
            raise _ParseError

        self._depth += 1
        try:
            left = self._parse_prefix()

            while True:
                tok = self.current
                if tok.kind not in _INFIX_BP:
                    break
                left_bp, right_bp = _INFIX_BP[tok.kind]
                if left_bp < min_bp:
                    break
                op_tok = self._advance()
                right = self._parse_expression(right_bp)
                left = BinaryExpr(
                    BinOp(_BINARY_OPS[op_tok.kind], op_tok.span),
                    left, right,
                    Span.between(left.span, right.span),
                )
        finally:
            self._depth -= 1

        return left

    def _parse_prefix(self) -> Expr:
        """Parse a prefix expression (literal, group or unary operator)."""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return NumberExpr(float(tok.lexeme), tok.span)

        if tok.kind == TokenKind.LPAREN:
            self._advance()
            expr = self._parse_expression(0)
            rparen = self._expect(TokenKind.RPAREN)
            # No group node; the inner node takes the span of the parentheses
            return replace(expr, span=Span.between(tok.span, rparen.span))

        if tok.kind in _UNARY_OPS:
            self._advance()
            operand = self._parse_expression(_PREFIX_BP)
            return UnaryExpr(
                UnOp(_UNARY_OPS[tok.kind], tok.span),
                operand,
                Span.between(tok.span, operand.span),
            )

        self._error(f"expected expression, got {tok.kind}", tok.span)
        raise _ParseError


def parse(source: str, filename: str = "<input>") -> Ast:
    """Parse *source* into an Ast. Use :class:`Parser` to get diagnostics."""
    return Parser(source, filename).parse()


class _ParseError(Exception):
    """Internal exception for parser error recovery."""
