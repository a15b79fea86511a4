"""
Read-print loop for the MAL reader.

Reads a line, turns it into a form, hands the form to an evaluator and
prints the result. Evaluation lives outside this package, so the default
evaluator returns the form unchanged.

Usage:
    mal-read                 # interactive, prompt "user> "
    mal-read program.mal     # print every form in a file

Set LOGLEVEL=DEBUG to see token and form counts on stderr.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Callable, Optional

import click

from . import __version__
from .lexer import Lexer, ReaderError
from .parser import Data, Parser, NoFormError, read_all
from .printer import pr_str

try:
    import readline
except ImportError:  # no line editing on this platform
    readline = None

logger = logging.getLogger(__name__)

PROMPT = "user> "
DEFAULT_HISTORY_SIZE = 10

Evaluator = Callable[[Data], Data]


def identity(data: Data) -> Data:
    return data


def _get_log_level() -> int:
    """
    Determine log level from LOGLEVEL environment variable.
    Defaults to WARNING if not set.
    """
    loglevel_env = os.getenv("LOGLEVEL", "").upper()
    if loglevel_env:
        level = getattr(logging, loglevel_env, None)
        if isinstance(level, int):
            return level

    return logging.WARNING


def _echo(text: str, err: bool = False):
    """Write a line as UTF-8 bytes; bytes that were not valid UTF-8 go out unchanged."""
    click.echo(text.encode("utf-8", errors="surrogateescape"), err=err)


def rep(line: str, evaluate: Evaluator = identity, comments_to_eof: bool = False) -> Optional[str]:
    """
    Read the first form on ``line``, evaluate it and print the result.

    Returns:
        The printed result, or None if the line holds no form

    Raises:
        ReaderError: If the line cannot be read
    """
    lexer = Lexer(line, "<repl>", comments_to_eof=comments_to_eof)
    tokens = lexer.tokenize()
    for warning in lexer.warnings:
        logger.warning(str(warning).rstrip())
    logger.debug("read %d token(s)", len(tokens))

    try:
        data, consumed = Parser(tokens, lexer.source, "<repl>").parse()
    except NoFormError:
        return None

    if consumed < len(tokens):
        logger.debug("ignoring %d token(s) after the first form", len(tokens) - consumed)
    return pr_str(evaluate(data))


def repl(history_size: int = DEFAULT_HISTORY_SIZE, comments_to_eof: bool = False,
         evaluate: Evaluator = identity):
    """Run the interactive loop until end of input."""
    if readline is not None:
        readline.set_history_length(history_size)

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            click.echo("\ngoodbye")
            return

        try:
            out = rep(line, evaluate, comments_to_eof=comments_to_eof)
        except ReaderError as e:
            _echo(str(e).rstrip(), err=True)
            continue

        if out is not None:
            _echo(out)


def print_file(path: Path, comments_to_eof: bool = False) -> int:
    """Print every form in ``path``; returns a process exit status."""
    try:
        forms = read_all(path.read_bytes(), str(path), comments_to_eof=comments_to_eof)
    except ReaderError as e:
        _echo(str(e).rstrip(), err=True)
        return 1

    logger.debug("read %d form(s) from %s", len(forms), path)
    for form in forms:
        _echo(pr_str(form))
    return 0


@click.command()
@click.argument("file", required=False,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--comments-to-eof", is_flag=True,
              help="Let a ';' comment run to the end of the input instead of the end of its line.")
@click.option("--history-size", default=DEFAULT_HISTORY_SIZE, show_default=True,
              type=click.IntRange(min=0), help="Number of lines kept in the interactive history.")
@click.version_option(__version__, prog_name="mal-read")
def main(file: Optional[Path], comments_to_eof: bool, history_size: int):
    """Read MAL forms and print them back."""
    logging.basicConfig(
        level=_get_log_level(),
        format='%(message)s',
        stream=sys.stderr
    )

    if file is not None:
        sys.exit(print_file(file, comments_to_eof))
    repl(history_size, comments_to_eof)


if __name__ == "__main__":
    main()
