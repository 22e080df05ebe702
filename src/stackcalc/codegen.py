"""Code generator: lowers an Ast to Bytecode.

A single post-order walk. Every statement's value is popped except the
last one, which is returned; a program evaluates to its final statement.
"""

from __future__ import annotations

import logging

from stackcalc.ast_nodes import (
    Ast,
    BinaryExpr,
    BinOpKind,
    Expr,
    NumberExpr,
    Stmt,
    UnaryExpr,
    UnOpKind,
)
from stackcalc.bytecode import Bytecode, ConstantPoolFullError, Opcode
from stackcalc.source import Span

logger = logging.getLogger(__name__)

_BINARY_OPCODES: dict[BinOpKind, Opcode] = {
    BinOpKind.ADD: Opcode.ADD,
    BinOpKind.SUB: Opcode.SUBTRACT,
    BinOpKind.MUL: Opcode.MULTIPLY,
    BinOpKind.DIV: Opcode.DIVIDE,
    BinOpKind.REM: Opcode.REMAINDER,
}

_UNARY_OPCODES: dict[UnOpKind, Opcode] = {
    UnOpKind.NEG: Opcode.NEGATE,
}


class CodegenError(Exception):
    """The program cannot be represented as bytecode."""

    def __init__(self, message: str, span: Span | None = None) -> None:
        self.message = message
        self.span = span
        super().__init__(message)


class CodeGenerator:
    """Walks an Ast and emits a Bytecode program."""

    def __init__(self) -> None:
        self._bytecode = Bytecode()

    def generate(self, ast: Ast) -> Bytecode:
        if not ast.decls:
            raise CodegenError("nothing to evaluate")

        last = len(ast.decls) - 1
        for i, decl in enumerate(ast.decls):
            self._stmt(decl.stmt, is_last=i == last)

        bytecode, self._bytecode = self._bytecode, Bytecode()
        logger.debug(
            "generated %d bytes, %d constants",
            len(bytecode), len(bytecode.constants),
        )
        return bytecode

    def _stmt(self, stmt: Stmt, *, is_last: bool) -> None:
        self._expr(stmt.expr)
        self._bytecode.write_opcode(Opcode.RETURN if is_last else Opcode.POP)

    def _expr(self, expr: Expr) -> None:
        # Post-order over an explicit stack; left-associated chains nest as
        # deep as the source is long
        pending: list[Expr | Opcode] = [expr]
        while pending:
            item = pending.pop()
            match item:
                case Opcode():
                    self._bytecode.write_opcode(item)
                case NumberExpr(value=value, span=span):
                    try:
                        index = self._bytecode.add_constant(value)
                    except ConstantPoolFullError as e:
                        raise CodegenError(str(e), span) from e
                    self._bytecode.write_opcode(Opcode.CONSTANT)
                    self._bytecode.write_byte(index)
                case UnaryExpr(op=op, operand=operand):
                    pending.append(_UNARY_OPCODES[op.kind])
                    pending.append(operand)
                case BinaryExpr(op=op, left=left, right=right):
                    pending.append(_BINARY_OPCODES[op.kind])
                    pending.append(right)
                    pending.append(left)
                case _:
                    raise TypeError(f"unknown expression node: {type(item).__name__}")


def generate(ast: Ast) -> Bytecode:
    """Compile *ast* to bytecode. Raises :class:`CodegenError`."""
    return CodeGenerator().generate(ast)
