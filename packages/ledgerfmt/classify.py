"""Line classification: raw journal text to :class:`JournalLine` records.

Classification is a fold over the input lines. The only state carried from one
line to the next is whether a ``comment`` … ``end comment`` block is open,
held in an immutable :class:`BlockState`.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import dropwhile

from .errors import UnexpectedEndComment, UnterminatedCommentBlock
from .lexing import BlockToggle, block_toggle, split_comment, split_lines, tokenize
from .logging_setup import get_logger
from .models import CommentBody, JournalLine, LineKind

_logger = get_logger("ledgerfmt.classify")

_ASCII_DIGITS = frozenset("0123456789")


@dataclass(frozen=True, slots=True)
class BlockState:
    """Comment-block accumulator; ``opened_at`` is the opening line number."""

    opened_at: int | None = None

    @property
    def is_open(self) -> bool:
        return self.opened_at is not None


def _kind_of(content: str, tokens: list[str]) -> LineKind:
    if not tokens:
        return LineKind.OTHER
    first = content[0]
    if first in _ASCII_DIGITS:
        return LineKind.DATE
    if first in " \t":
        return LineKind.POSTING
    return LineKind.OTHER


def classify_line(state: BlockState, line: str, number: int) -> tuple[BlockState, JournalLine]:
    """Classify one line given the block state left by the previous line.

    Returns the block state for the next line together with the record.

    Raises
    ------
    UnexpectedEndComment
        ``line`` is ``end comment`` but no block is open.
    """

    in_comment = state.is_open
    toggle = block_toggle(line)
    if toggle is BlockToggle.OPEN and not state.is_open:
        state = BlockState(opened_at=number)
        in_comment = True
    elif toggle is BlockToggle.CLOSE:
        if not state.is_open:
            raise UnexpectedEndComment(number, line.strip())
        state = BlockState()

    body = split_comment(line, in_block=in_comment)
    if isinstance(body, CommentBody):
        return state, JournalLine(number=number, kind=LineKind.COMMENT, body=body)

    tokens = tokenize(body.content)
    kind = _kind_of(body.content, tokens)
    fields = tuple(tokens) if kind is LineKind.POSTING else ()
    return state, JournalLine(number=number, kind=kind, body=body, fields=fields)


def classify(text: str) -> list[JournalLine]:
    """Classify every line of ``text``.

    Leading blank lines are skipped and do not count toward line numbers.

    Raises
    ------
    UnexpectedEndComment
        An ``end comment`` line appears outside a block.
    UnterminatedCommentBlock
        A block is still open at end of input.
    """

    state = BlockState()
    out: list[JournalLine] = []
    body_lines = dropwhile(lambda ln: not ln.strip(), split_lines(text))
    for number, raw in enumerate(body_lines, start=1):
        state, line = classify_line(state, raw, number)
        out.append(line)

    if state.opened_at is not None:
        raise UnterminatedCommentBlock(state.opened_at)

    _logger.debug(
        "classified %d lines (%d postings)",
        len(out),
        sum(1 for ln in out if ln.kind is LineKind.POSTING),
    )
    return out


__all__ = ["BlockState", "classify_line", "classify"]
