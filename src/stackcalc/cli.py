"""stackcalc command-line interface."""

from __future__ import annotations

import logging
import sys
from enum import Enum

import click

from stackcalc import __version__
from stackcalc.bytecode import disassemble
from stackcalc.config import load_default_config
from stackcalc.errors import Diagnostic, DiagnosticRenderer
from stackcalc.highlight import highlight_source
from stackcalc.lexer import LexError, tokenize
from stackcalc.parser import Parser
from stackcalc.pipeline import compile_source, evaluate

_FILENAME = "<input>"


def _report(diagnostics: list[Diagnostic], source: str, *, color: bool) -> None:
    renderer = DiagnosticRenderer(color=color)
    for diag in diagnostics:
        click.echo(renderer.render(diag, source, _FILENAME), err=True)


@click.group()
@click.version_option(__version__, prog_name="stackcalc")
def main() -> None:
    """A bytecode calculator for arithmetic expressions."""


@main.command(name="eval")
@click.argument("source")
@click.option("--color/--no-color", default=None, help="Colour diagnostics.")
@click.option("--trace/--no-trace", default=None, help="Log every executed instruction.")
def eval_cmd(source: str, color: bool | None, trace: bool | None) -> None:
    """Evaluate SOURCE and print the value of its last statement."""
    config = load_default_config()
    if color is None:
        color = config.output.color
    if trace is None:
        trace = config.run.trace
    if trace:
        logging.basicConfig(
            level=logging.DEBUG, stream=sys.stderr,
            format="%(name)s: %(message)s",
        )

    result = evaluate(source, _FILENAME)
    _report(result.diagnostics, source, color=color)
    if not result.ok:
        raise SystemExit(1)
    click.echo(repr(result.value))


@main.command()
@click.argument("source")
def tokens(source: str) -> None:
    """Print the tokens of SOURCE, including lexical errors."""
    for item in tokenize(source):
        if isinstance(item, LexError):
            click.echo(f"{'error':<10} {item.lexeme!r} {item.span}  {item.message}")
        else:
            click.echo(f"{item.kind.name:<10} {item.lexeme!r} {item.span}")


@main.command()
@click.argument("source")
def ast(source: str) -> None:
    """Print the syntax tree of SOURCE."""
    parser = Parser(source, _FILENAME)
    tree = parser.parse()
    if parser.diagnostics:
        _report(parser.diagnostics, source, color=load_default_config().output.color)
    _dump_ast(tree)
    if not tree.complete:
        raise SystemExit(1)


@main.command()
@click.argument("source")
def disasm(source: str) -> None:
    """Compile SOURCE and print the bytecode listing."""
    _, bytecode, diagnostics = compile_source(source, _FILENAME)
    _report(diagnostics, source, color=load_default_config().output.color)
    if bytecode is None:
        raise SystemExit(1)
    click.echo(disassemble(bytecode))


@main.command()
@click.argument("source")
@click.option("--color/--no-color", default=None, help="Emit ANSI colours.")
def highlight(source: str, color: bool | None) -> None:
    """Print SOURCE with syntax highlighting."""
    if color is None:
        color = load_default_config().output.color
    click.echo(highlight_source(source, color=color))


def _dump_ast(root: object) -> None:
    """Print a readable AST dump."""
    # Entries are either a finished line or a (node, depth) still to expand
    pending: list[str | tuple[object, int]] = [(root, 0)]
    while pending:
        entry = pending.pop()
        if isinstance(entry, str):
            click.echo(entry)
            continue

        node, depth = entry
        indent = "  " * depth
        name = type(node).__name__
        if not hasattr(node, "__dataclass_fields__"):
            click.echo(f"{indent}{name}: {node!r}")
            continue

        out: list[str | tuple[object, int]] = [f"{indent}{name}"]
        for field_name in node.__dataclass_fields__:  # type: ignore[attr-defined]
            if field_name == "span":
                continue
            value = getattr(node, field_name)
            if isinstance(value, list):
                if value:
                    out.append(f"{indent}  {field_name}:")
                    out.extend((item, depth + 2) for item in value)
                else:
                    out.append(f"{indent}  {field_name}: []")
            elif hasattr(value, "__dataclass_fields__"):
                out.append(f"{indent}  {field_name}:")
                out.append((value, depth + 2))
            elif isinstance(value, Enum):
                out.append(f"{indent}  {field_name}: {value.name}")
            else:
                out.append(f"{indent}  {field_name}: {value!r}")
        pending.extend(reversed(out))
