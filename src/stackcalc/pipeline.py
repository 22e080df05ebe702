"""Full pipeline: source text -> Ast -> Bytecode -> result."""

from __future__ import annotations

from dataclasses import dataclass, field

from stackcalc.ast_nodes import Ast
from stackcalc.bytecode import Bytecode
from stackcalc.codegen import CodegenError, generate
from stackcalc.errors import CODEGEN, RUNTIME, CompileError, Diagnostic, make_error
from stackcalc.parser import Parser
from stackcalc.vm import VM, VmError


@dataclass
class EvalResult:
    """Outcome of evaluating a source string."""

    ok: bool
    value: float | None = None
    ast: Ast | None = None
    bytecode: Bytecode | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)


def compile_source(
    source: str, filename: str = "<input>",
) -> tuple[Ast, Bytecode | None, list[Diagnostic]]:
    """Parse and generate code. The bytecode is None if any stage failed."""
    parser = Parser(source, filename)
    ast = parser.parse()
    diagnostics = list(parser.diagnostics)
    if not ast.complete:
        return ast, None, diagnostics

    try:
        bytecode = generate(ast)
    except CodegenError as e:
        diagnostics.append(make_error(CODEGEN, e.message, e.span))
        return ast, None, diagnostics
    return ast, bytecode, diagnostics


def compile_or_raise(source: str, filename: str = "<input>") -> Bytecode:
    """Like :func:`compile_source`, but raise CompileError on any error."""
    _, bytecode, diagnostics = compile_source(source, filename)
    if bytecode is None:
        raise CompileError(diagnostics)
    return bytecode


def evaluate(source: str, filename: str = "<input>") -> EvalResult:
    """Run the whole pipeline: parse -> generate -> execute.

    A program with parse or code generation errors is never executed.
    """
    ast, bytecode, diagnostics = compile_source(source, filename)
    if bytecode is None:
        return EvalResult(ok=False, ast=ast, diagnostics=diagnostics)

    try:
        value = VM(bytecode).run()
    except VmError as e:
        diag = make_error(RUNTIME, e.message)
        diag.notes.append(f"at bytecode offset {e.offset}")
        diagnostics.append(diag)
        return EvalResult(
            ok=False, ast=ast, bytecode=bytecode, diagnostics=diagnostics,
        )

    return EvalResult(
        ok=True, value=value, ast=ast, bytecode=bytecode, diagnostics=diagnostics,
    )
