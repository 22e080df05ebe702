"""AST node definitions for the stackcalc language."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from stackcalc.source import Span

# ── Operators ────────────────────────────────────────────────────


class UnOpKind(Enum):
    NEG = auto()


class BinOpKind(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    REM = auto()


@dataclass(frozen=True)
class UnOp:
    kind: UnOpKind
    span: Span  # the operator token


@dataclass(frozen=True)
class BinOp:
    kind: BinOpKind
    span: Span  # the operator token


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class NumberExpr:
    value: float
    span: Span


@dataclass(frozen=True)
class UnaryExpr:
    op: UnOp
    operand: Expr
    span: Span


@dataclass(frozen=True)
class BinaryExpr:
    op: BinOp
    left: Expr
    right: Expr
    span: Span


Expr = Union[NumberExpr, UnaryExpr, BinaryExpr]


# ── Statements and declarations ──────────────────────────────────


@dataclass(frozen=True)
class Stmt:
    """An expression evaluated for its value, which is then discarded."""

    expr: Expr
    span: Span


@dataclass(frozen=True)
class Decl:
    stmt: Stmt
    span: Span


@dataclass(frozen=True)
class Ast:
    """A parsed program.

    ``complete`` is False when the parser recorded at least one error; such
    an AST holds only the declarations that parsed cleanly and must not be
    executed.
    """

    decls: list[Decl] = field(default_factory=list)
    complete: bool = True
