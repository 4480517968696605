"""Public interface for the ``ledgerfmt`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .amount import has_status, parse_amount, render_amount
from .api import DEFAULT_CONTEXT_SIZE, check_journal, format_journal, make_diff
from .classify import classify
from .errors import (
    AmountParseError,
    FormatError,
    UndeterminedLineKind,
    UnexpectedEndComment,
    UnterminatedCommentBlock,
)
from .models import (
    Amount,
    Comment,
    CommentBody,
    ContentBody,
    Context,
    Currency,
    Delimiter,
    DiffLine,
    Expected,
    JournalLine,
    LineKind,
    Mismatch,
    Resulting,
)

__all__ = [
    # API
    "format_journal",
    "make_diff",
    "check_journal",
    "classify",
    "parse_amount",
    "render_amount",
    "has_status",
    "DEFAULT_CONTEXT_SIZE",
    # Errors
    "FormatError",
    "AmountParseError",
    "UndeterminedLineKind",
    "UnexpectedEndComment",
    "UnterminatedCommentBlock",
    # Models / types
    "Amount",
    "Currency",
    "Comment",
    "CommentBody",
    "ContentBody",
    "Delimiter",
    "JournalLine",
    "LineKind",
    "Mismatch",
    "DiffLine",
    "Context",
    "Expected",
    "Resulting",
]
