"""Shared test helpers for the stackcalc test suite."""

from __future__ import annotations

from stackcalc.ast_nodes import Ast
from stackcalc.bytecode import Bytecode, Opcode
from stackcalc.codegen import generate
from stackcalc.parser import Parser
from stackcalc.vm import VM


def parse_ok(source: str) -> Ast:
    """Parse source, asserting no diagnostics."""
    parser = Parser(source, "<test>")
    ast = parser.parse()
    assert ast.complete, [d.message for d in parser.diagnostics]
    return ast


def run(source: str) -> float:
    """Parse, generate and execute source, returning the program's value."""
    return VM(generate(parse_ok(source))).run()


def assemble(*items: Opcode | int, constants: tuple[float, ...] = ()) -> Bytecode:
    """Build a Bytecode by hand from opcodes and raw bytes."""
    bytecode = Bytecode()
    for value in constants:
        bytecode.add_constant(value)
    for item in items:
        if isinstance(item, Opcode):
            bytecode.write_opcode(item)
        else:
            bytecode.write_byte(item)
    return bytecode
