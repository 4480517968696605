"""Two-pass layout: measure canonical column widths, then render every line.

Canonical posting layout::

    <indent><account><pad>  <amount>[  <extra fields>]<pad> <trailing comment>

The indent is four spaces, or two for accounts carrying a status marker
(``* assets:cash``), so status markers hang into the indent. Amounts start in
the same column on every posting line and trailing comments start in the same
column on every non-comment line.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .amount import has_status, render_amount_field
from .classify import classify
from .errors import UndeterminedLineKind
from .logging_setup import get_logger
from .models import CommentBody, JournalLine, LineKind

_logger = get_logger("ledgerfmt.layout")

# Columns between the account field and the amount field.
_GAP = 2


@dataclass(frozen=True, slots=True)
class Widths:
    """Column widths computed by :func:`measure`.

    Attributes
    ----------
    account:
        Width of the widest account field, indent included.
    line:
        Width every non-comment line is padded to before its trailing comment.
    """

    account: int = 0
    line: int = 0


def _account_width(account: str) -> int:
    return len(account) + (2 if has_status(account) else 4)


def _account_field(account: str) -> str:
    indent = "  " if has_status(account) else "    "
    return indent + account.strip()


def _amount_field(fields: Sequence[str]) -> str:
    if len(fields) < 2:
        return ""
    return "  ".join([render_amount_field(fields[1]), *fields[2:]])


def _require_kind(line: JournalLine) -> None:
    if line.kind is LineKind.UNDETERMINED:
        raise UndeterminedLineKind(line.number)


def measure(lines: Iterable[JournalLine]) -> Widths:
    """First pass: widest account field and widest line.

    Posting widths are taken against the final account width, so a wide
    account appearing after a wide amount still leaves room for both.
    """

    max_account = 0
    max_amount: int | None = None
    max_line = 0
    for line in lines:
        _require_kind(line)
        if line.kind is LineKind.COMMENT:
            continue
        if line.kind is LineKind.POSTING:
            max_account = max(max_account, _account_width(line.fields[0]))
            amount_width = len(_amount_field(line.fields))
            max_amount = amount_width if max_amount is None else max(max_amount, amount_width)
            continue
        max_line = max(max_line, len(line.content or ""))

    if max_amount is not None:
        max_line = max(max_line, max_account + max_amount + _GAP)
    return Widths(account=max_account, line=max_line)


def render_line(line: JournalLine, widths: Widths) -> str:
    """Second pass: render one line without its newline."""

    _require_kind(line)
    if isinstance(line.body, CommentBody):
        return str(line.body.comment)

    if line.kind is LineKind.POSTING:
        account = _account_field(line.fields[0])
        content = f"{account:<{widths.account}}{' ' * _GAP}{_amount_field(line.fields)}"
    else:
        content = line.body.content

    rendered = content.ljust(widths.line)
    if line.body.trailing is not None:
        rendered = f"{rendered} {line.body.trailing}"
    return rendered.rstrip()


def format_journal(text: str) -> str:
    """Return the canonical form of journal ``text``.

    The result ends with exactly one newline and has no trailing blank lines.

    Raises
    ------
    FormatError
        Any classification or amount error; nothing is returned in that case.
    """

    lines = classify(text)
    widths = measure(lines)
    _logger.debug("layout widths: account=%d line=%d", widths.account, widths.line)
    buffer = "".join(f"{render_line(line, widths)}\n" for line in lines)
    return buffer.rstrip() + "\n"


__all__ = ["Widths", "measure", "render_line", "format_journal"]
