"""
bologna - Interactive Front-End Command-Line Interface
======================================================

Reads Bologna source from the terminal (or a file), parses one
top-level construct at a time, and reports what was parsed. Nothing is
evaluated: every construct is parsed, reported, and discarded.

Usage Examples
--------------
Interactive session:
    $ bologna
    Bologna v0.1.0
    > def f(x y) x + y
    Parsed a function definition.

Parse a file and show each tree:
    $ bologna --ast program.bo

Dump the token stream:
    $ bologna --tokens program.bo

Add an operator:
    $ bologna -b '/=40'
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from bologna import __version__
from bologna.cli.errors import ExitCode, handle_cli_exception
from bologna.frontend.ast import ASTPrinter
from bologna.frontend.driver import Session, SessionOptions, TopLevelKind
from bologna.frontend.errors import LexicalError
from bologna.frontend.lexer import Lexer, TokenKind
from bologna.frontend.precedence import DEFAULT_PRECEDENCE, parse_operator_spec

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


def _parse_binops(
    ctx: click.Context,
    param: click.Parameter,
    value: tuple[str, ...],
) -> dict[str, int]:
    """Turn repeated OP=PREC options into an operator mapping."""
    operators: dict[str, int] = {}
    for spec in value:
        try:
            symbol, strength = parse_operator_spec(spec)
            DEFAULT_PRECEDENCE.with_operators({symbol: strength})
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from None
        operators[symbol] = strength
    return operators


def dump_tokens(stream: TextIO, filename: str) -> None:
    """Print every token, whitespace runs included, one per line."""
    lexer = Lexer(stream, filename, emit_whitespace=True)
    while True:
        try:
            token = lexer.next_token()
        except LexicalError as e:
            click.echo(str(e), err=True)
            continue

        click.echo(repr(token))
        if token.kind is TokenKind.EOF:
            return


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--prompt",
    default="> ",
    show_default=True,
    help="Prompt shown before each construct in interactive use",
)
@click.option(
    "--no-prompt",
    is_flag=True,
    help="Never show the banner or prompt",
)
@click.option(
    "--ast",
    "show_ast",
    is_flag=True,
    help="Print the tree of each parsed construct",
)
@click.option(
    "--tokens",
    "show_tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "-b", "--binop",
    multiple=True,
    callback=_parse_binops,
    metavar="OP=PREC",
    help="Install an extra binary operator (can be repeated)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="bologna")
def main(
    input_file: Optional[Path],
    prompt: str,
    no_prompt: bool,
    show_ast: bool,
    show_tokens: bool,
    binop: dict[str, int],
    verbose: bool,
) -> None:
    """
    Parse Bologna definitions, externs, and expressions.

    INPUT_FILE is read instead of standard input when given.

    \b
    Examples:
        bologna                      # Interactive session
        bologna prog.bo              # Report each construct in a file
        bologna --ast prog.bo        # Also print each tree
        bologna --tokens prog.bo     # Token dump
        bologna -b '/=40'            # Treat '/' as a binary operator
    """
    setup_logging(verbose)

    try:
        if input_file is None:
            stream = sys.stdin
            interactive = not no_prompt and stream.isatty()
            process(stream, "<stdin>", prompt, binop, show_ast, show_tokens, interactive)
        else:
            with input_file.open("r", encoding="utf-8") as stream:
                process(stream, str(input_file), prompt, binop, show_ast, show_tokens, False)

    except Exception as e:
        handle_cli_exception(e, verbose)

    sys.exit(ExitCode.SUCCESS)


def process(
    stream: TextIO,
    filename: str,
    prompt: str,
    operators: dict[str, int],
    show_ast: bool,
    show_tokens: bool,
    interactive: bool,
) -> None:
    if show_tokens:
        dump_tokens(stream, filename)
    else:
        run_session(stream, filename, prompt, operators, show_ast, interactive)


def run_session(
    stream: TextIO,
    filename: str,
    prompt: str,
    operators: dict[str, int],
    show_ast: bool,
    interactive: bool,
) -> None:
    """Drive one session, writing reports to stderr and trees to stdout."""
    options = SessionOptions(prompt=prompt, filename=filename, extra_operators=operators)

    def show_prompt() -> None:
        click.echo(options.prompt, nl=False, err=True)

    on_prompt = None
    if interactive:
        click.echo(f"Bologna v{__version__}", err=True)
        on_prompt = show_prompt

    session = Session(stream, options, on_prompt)
    printer = ASTPrinter()

    for result in session.run():
        if result.kind is TopLevelKind.SEPARATOR:
            continue

        click.echo(result.describe(), err=True)
        if show_ast and result.node is not None:
            click.echo(printer.print(result.node))

    if interactive:
        click.echo(err=True)

    stats = session.stats
    logger.info("%d parsed, %d failed", stats.parsed, stats.failed)


if __name__ == "__main__":
    main()
