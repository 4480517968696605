"""Public entry points for the ``ledgerfmt`` package.

The formatting and diff implementations live in :mod:`ledgerfmt.layout` and
:mod:`ledgerfmt.diff` and are re-exported here; :func:`check_journal` composes
them for check mode. Nothing in this module performs I/O.
"""

from __future__ import annotations

from .diff import make_diff
from .layout import format_journal
from .logging_setup import get_logger
from .models import Mismatch

# Unchanged lines shown around each change in check-mode reports.
DEFAULT_CONTEXT_SIZE = 3

_logger = get_logger("ledgerfmt.api")


def check_journal(text: str, context_size: int = DEFAULT_CONTEXT_SIZE) -> list[Mismatch]:
    """Compare ``text`` with its canonical form.

    Returns an empty list when ``text`` is already canonical (line for line).

    Raises
    ------
    FormatError
        ``text`` cannot be formatted.
    """

    mismatches = make_diff(text, format_journal(text), context_size)
    _logger.debug("check found %d mismatch(es)", len(mismatches))
    return mismatches


__all__ = ["DEFAULT_CONTEXT_SIZE", "check_journal", "format_journal", "make_diff"]
