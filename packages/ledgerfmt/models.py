"""Data models for ``ledgerfmt``.

Journal lines, comments, amounts and diff mismatches. Records are frozen,
slotted dataclasses except where a value is built up incrementally
(:class:`Mismatch`). Absent-vs-present is spelled out with sum types
(``type LineBody = ContentBody | CommentBody``) instead of pairs of nullable
fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Comments and line bodies
# ---------------------------------------------------------------------------


class Delimiter(Enum):
    """Comment marker that introduced a comment."""

    SEMICOLON = ";"
    HASH = "#"
    # Whole-line and comment-block comments keep their text verbatim.
    NONE = ""


@dataclass(frozen=True, slots=True)
class Comment:
    """A comment with the marker it was introduced by.

    ``text`` excludes the marker and is right-trimmed; leading whitespace after
    the marker is kept so ``"; note"`` renders back unchanged.
    """

    delimiter: Delimiter
    text: str

    def __str__(self) -> str:
        return f"{self.delimiter.value}{self.text}"


@dataclass(frozen=True, slots=True)
class CommentBody:
    """The whole line is a comment."""

    comment: Comment


@dataclass(frozen=True, slots=True)
class ContentBody:
    """Non-comment content with an optional trailing comment."""

    content: str
    trailing: Comment | None = None


LineBody: TypeAlias = ContentBody | CommentBody


class LineKind(Enum):
    DATE = "date"
    POSTING = "posting"
    COMMENT = "comment"
    OTHER = "other"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True, slots=True)
class JournalLine:
    """One classified input line.

    Attributes
    ----------
    number:
        1-based line number, counted after leading blank lines are skipped.
    kind:
        The line's classification.
    body:
        Either the comment (whole-line comments) or the content with an
        optional trailing comment.
    fields:
        Posting tokens (account, amount, extra fields). Empty for every kind
        other than :attr:`LineKind.POSTING`.
    """

    number: int
    kind: LineKind
    body: LineBody
    fields: tuple[str, ...] = ()

    @property
    def content(self) -> str | None:
        if isinstance(self.body, ContentBody):
            return self.body.content
        return None

    @property
    def comment(self) -> Comment | None:
        if isinstance(self.body, CommentBody):
            return self.body.comment
        return self.body.trailing


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Currency:
    """A commodity symbol and where it sat relative to the number.

    ``spaced`` is only meaningful for suffix symbols (``10 EUR`` vs ``10EUR``);
    prefix symbols always render with canonical spacing and never set it.
    """

    symbol: str
    prepend: bool
    spaced: bool = False


@dataclass(frozen=True, slots=True)
class Amount:
    """A decimal amount as integer mantissa plus digits after the point."""

    mantissa: int
    precision: int = 0
    currency: Currency | None = None

    def __str__(self) -> str:
        from .amount import render_amount  # local import: amount imports models

        return render_amount(self)


# ---------------------------------------------------------------------------
# Diff results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Context:
    """An unchanged line shown around a change."""

    text: str


@dataclass(frozen=True, slots=True)
class Expected:
    """A line present only in the canonical text."""

    text: str


@dataclass(frozen=True, slots=True)
class Resulting:
    """A line present only in the original text."""

    text: str


DiffLine: TypeAlias = Context | Expected | Resulting


@dataclass(slots=True)
class Mismatch:
    """One grouped region of differing lines with surrounding context.

    ``line_number`` counts lines of the canonical text, ``line_number_orig``
    lines of the original; both point at the first line in ``lines``.
    """

    line_number: int
    line_number_orig: int
    lines: list[DiffLine] = field(default_factory=list)


__all__ = [
    "Delimiter",
    "Comment",
    "CommentBody",
    "ContentBody",
    "LineBody",
    "LineKind",
    "JournalLine",
    "Currency",
    "Amount",
    "Context",
    "Expected",
    "Resulting",
    "DiffLine",
    "Mismatch",
]
