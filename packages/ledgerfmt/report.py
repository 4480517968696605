"""Check-mode report rendering.

Mismatches are written line by line to an :class:`OutputSink`. Sinks advertise
whether they can show color; the renderer only asks for styles when they can,
so the same report renders plain on pipes and files.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from rich.console import Console

from .models import Context, DiffLine, Expected, Mismatch, Resulting

ADDED_STYLE = "green"
REMOVED_STYLE = "red"


@runtime_checkable
class OutputSink(Protocol):
    """Line-oriented output with an optional color capability."""

    def supports_color(self) -> bool: ...

    def write_line(self, text: str, style: str | None = None) -> None: ...


class RichConsoleSink:
    """:class:`OutputSink` backed by a :class:`rich.console.Console`.

    Color support follows the console's detected color system (``None`` on
    pipes and dumb terminals) and honors ``NO_COLOR``.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()

    def supports_color(self) -> bool:
        return self.console.color_system is not None and not self.console.no_color

    def write_line(self, text: str, style: str | None = None) -> None:
        # Journal text is data: no markup, highlighting, emoji codes or wrapping.
        self.console.print(
            text,
            style=style,
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )


def section_title(name: str) -> Callable[[int], str]:
    """Return a header factory for mismatches found in ``name``."""

    def _title(line_number_orig: int) -> str:
        return f"Diff in {name} at line {line_number_orig}:"

    return _title


def _prefixed(line: DiffLine) -> tuple[str, str | None]:
    if isinstance(line, Expected):
        return f"+{line.text}", ADDED_STYLE
    if isinstance(line, Resulting):
        return f"-{line.text}", REMOVED_STYLE
    if isinstance(line, Context):
        return f" {line.text}", None
    raise TypeError(f"unknown diff line: {line!r}")


def render_report(
    mismatches: Iterable[Mismatch],
    sink: OutputSink,
    *,
    title: Callable[[int], str],
) -> int:
    """Write every mismatch to ``sink`` and return how many were written.

    Each mismatch starts with ``title(mismatch.line_number_orig)``, followed by
    its lines prefixed with ``" "`` (context), ``"+"`` (canonical only) or
    ``"-"`` (original only).
    """

    color = sink.supports_color()
    count = 0
    for mismatch in mismatches:
        sink.write_line(title(mismatch.line_number_orig))
        for line in mismatch.lines:
            text, style = _prefixed(line)
            sink.write_line(text, style if color else None)
        count += 1
    return count


__all__ = [
    "ADDED_STYLE",
    "REMOVED_STYLE",
    "OutputSink",
    "RichConsoleSink",
    "section_title",
    "render_report",
]
