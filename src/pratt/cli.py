"""Command-line tools for parsing and evaluating Bantam expressions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click

from pratt import __version__
from pratt.ast_nodes import Expr, NumberExpr
from pratt.bantam import make_parser
from pratt.config import PrattConfig, default_config, load_config
from pratt.errors import DiagnosticRenderer, PrattError
from pratt.evaluator import evaluate, fold
from pratt.formatter import format_expr
from pratt.lexer import tokenize

_expression_arg = click.argument("expression", required=False)
_trailing_opt = click.option(
    "--allow-trailing",
    is_flag=True,
    help="Ignore tokens left after the expression (also set by pratt.toml).",
)


def _read_expression(expression: str | None) -> str:
    if expression is not None:
        return expression
    return click.get_text_stream("stdin").read()


def _fail(config: PrattConfig, error: PrattError) -> NoReturn:
    renderer = DiagnosticRenderer(color=config.output.color)
    click.echo(renderer.render(error.to_diagnostic()), err=True)
    raise SystemExit(1)


def _parse(config: PrattConfig, source: str, *, fused: bool, allow_trailing: bool) -> Expr:
    """Lex and parse `source`, rendering any error and exiting with status 1."""
    allow_trailing = allow_trailing or config.parse.allow_trailing
    parser = make_parser(fold)
    tokens = tokenize(source)
    try:
        if fused:
            return parser.interpret(tokens, exhaust=not allow_trailing)
        return parser.parse(tokens, exhaust=not allow_trailing)
    except PrattError as e:
        _fail(config, e)


@click.group()
@click.version_option(__version__, prog_name="pratt")
@click.option("-v", "--verbose", is_flag=True, help="Log parser activity to stderr.")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read settings from this file instead of the nearest pratt.toml.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Operator-precedence parsing of Bantam expressions."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.obj = load_config(Path(config_path)) if config_path else default_config()


@main.command()
@_expression_arg
@_trailing_opt
@click.pass_obj
def parse(config: PrattConfig, expression: str | None, allow_trailing: bool) -> None:
    """Print EXPRESSION fully parenthesized (reads stdin when omitted)."""
    tree = _parse(config, _read_expression(expression), fused=False, allow_trailing=allow_trailing)
    click.echo(format_expr(tree))


@main.command(name="eval")
@_expression_arg
@_trailing_opt
@click.option("--post", is_flag=True, help="Build the whole tree first, then evaluate it.")
@click.pass_obj
def eval_cmd(config: PrattConfig, expression: str | None, allow_trailing: bool, post: bool) -> None:
    """Fold EXPRESSION to a number while parsing it.

    Parts that cannot be folded, such as names and calls, are printed back
    in parenthesized form.
    """
    source = _read_expression(expression)
    if post:
        tree = _parse(config, source, fused=False, allow_trailing=allow_trailing)
        try:
            value = evaluate(tree)
        except PrattError as e:
            _fail(config, e)
        click.echo(format_expr(NumberExpr(value)))
        return
    result = _parse(config, source, fused=True, allow_trailing=allow_trailing)
    click.echo(format_expr(result))


@main.command()
@_expression_arg
@_trailing_opt
@click.pass_obj
def view(config: PrattConfig, expression: str | None, allow_trailing: bool) -> None:
    """Dump the AST of EXPRESSION."""
    tree = _parse(config, _read_expression(expression), fused=False, allow_trailing=allow_trailing)
    _dump_ast(tree, 0)


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if hasattr(node, "__dataclass_fields__"):
        fields = node.__dataclass_fields__  # type: ignore[union-attr]
        click.echo(f"{indent}{name}")
        for field_name in fields:
            value = getattr(node, field_name)
            if isinstance(value, tuple):
                if value:
                    click.echo(f"{indent}  {field_name}:")
                    for item in value:
                        _dump_ast(item, depth + 2)
                else:
                    click.echo(f"{indent}  {field_name}: []")
            elif hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            elif value is not None:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
