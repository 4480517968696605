"""CLI for the ``ledgerfmt`` package.

A Typer-based console interface around :func:`ledgerfmt.format_journal`.
Environment variables (``LEDGER_FILE``, ``LEDGERFMT_CONTEXT``,
``LEDGERFMT_LOG_LEVEL``) may be set in a local ``.env``, loaded with
``python-dotenv`` before anything else runs. Formatting logic lives in
``ledgerfmt.layout`` and ``ledgerfmt.diff``; this module only wires input,
output and exit codes.

Exit codes: ``0`` on success (and in check mode when the journal is already
canonical), ``1`` in check mode when differences were found, ``2`` on usage,
input/output or formatting errors.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .api import DEFAULT_CONTEXT_SIZE
from .diff import make_diff
from .errors import FormatError
from .layout import format_journal
from .logging_setup import configure_logging, get_logger
from .report import RichConsoleSink, render_report, section_title
from .sources import JournalReadError, JournalWriteError, read_journal, write_journal

EXIT_DIFFERENCES = 1
EXIT_ERROR = 2

_CONTEXT_ENV = "LEDGERFMT_CONTEXT"

_logger = get_logger("ledgerfmt.cli")


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


# ---- Small module-level helpers ----------------------------------------------


def _resolve_context_size(option: int | None) -> int:
    """Resolve the diff context size.

    Honors ``--context`` first, then the ``LEDGERFMT_CONTEXT`` env var, and
    falls back to :data:`DEFAULT_CONTEXT_SIZE` when neither holds a
    non-negative integer.
    """

    if option is not None:
        return option
    env_val = os.getenv(_CONTEXT_ENV)
    if not env_val:
        return DEFAULT_CONTEXT_SIZE
    try:
        size = int(env_val)
    except ValueError:
        size = -1
    if size < 0:
        _logger.warning("ignoring invalid %s=%r", _CONTEXT_ENV, env_val)
        return DEFAULT_CONTEXT_SIZE
    return size


def _make_console(color: ColorMode) -> Console:
    if color is ColorMode.ALWAYS:
        # An explicit --color always overrides NO_COLOR.
        return Console(force_terminal=True, color_system="standard", no_color=False)
    if color is ColorMode.NEVER:
        return Console(color_system=None)
    return Console()


def _fail(message: str) -> typer.Exit:
    Console(stderr=True).print(
        f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True
    )
    return typer.Exit(EXIT_ERROR)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Format ledger/hledger journals into canonical, column-aligned form. "
        "Reads FILE, '-' for stdin, or $LEDGER_FILE when FILE is omitted."
    ),
)


@app.command()
def main(
    file: Annotated[
        Path | None,
        typer.Argument(
            help="Journal to format ('-' reads standard input).",
            show_default=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write formatted journal to file."),
    ] = None,
    inplace: Annotated[
        bool, typer.Option("--inplace", "-i", help="Overwrite the input file.")
    ] = False,
    check: Annotated[
        bool,
        typer.Option(
            "--check", "-c", help="Report differences from canonical form instead of writing."
        ),
    ] = False,
    context: Annotated[
        int | None,
        typer.Option(
            "--context",
            min=0,
            help=f"Unchanged lines shown around each difference (env {_CONTEXT_ENV}).",
            show_default=False,
        ),
    ] = None,
    color: Annotated[
        ColorMode, typer.Option("--color", help="Colorize check-mode output.")
    ] = ColorMode.AUTO,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (env LEDGERFMT_LOG_LEVEL)."),
    ] = None,
) -> None:
    """Format a journal, or check whether it is already canonical."""

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    if inplace and output is not None:
        raise typer.BadParameter("cannot be combined with --output", param_hint="--inplace")
    if check and (inplace or output is not None):
        raise typer.BadParameter(
            "cannot be combined with --output or --inplace", param_hint="--check"
        )

    try:
        source = read_journal(file)
    except JournalReadError as e:
        _logger.debug("read failed", exc_info=True)
        raise _fail(str(e)) from e

    if inplace and source.path is None:
        raise typer.BadParameter("requires an input file", param_hint="--inplace")

    try:
        formatted = format_journal(source.text)
    except FormatError as e:
        _logger.debug("format failed for %s", source.name, exc_info=True)
        raise _fail(f"{source.name}: {e}") from e

    if check:
        mismatches = make_diff(source.text, formatted, _resolve_context_size(context))
        if not mismatches:
            _logger.info("%s is canonical", source.name)
            return
        sink = RichConsoleSink(_make_console(color))
        render_report(mismatches, sink, title=section_title(source.name))
        raise typer.Exit(EXIT_DIFFERENCES)

    try:
        write_journal(formatted, output=output, inplace=source.path if inplace else None)
    except JournalWriteError as e:
        _logger.debug("write failed", exc_info=True)
        raise _fail(str(e)) from e


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    # Running as a module: `python -m ledgerfmt.cli`
    app()
