"""Line diff grouped into context-windowed mismatches.

Used by check mode to compare a journal with its canonical form. The alignment
comes from :class:`difflib.SequenceMatcher`; this module only decides how
changed lines are grouped and how much unchanged context surrounds them:

- a change at least ``context_size`` unchanged lines after the previous one
  starts a new :class:`Mismatch`, led by up to ``context_size`` queued lines;
- otherwise it joins the open mismatch;
- the first ``context_size`` unchanged lines after a change trail the open
  mismatch.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from difflib import SequenceMatcher
from typing import Literal, TypeAlias

from .lexing import split_lines
from .logging_setup import get_logger
from .models import Context, Expected, Mismatch, Resulting

_logger = get_logger("ledgerfmt.diff")

ChangeTag: TypeAlias = Literal["-", "+", " "]


def line_changes(original: str, canonical: str) -> Iterator[tuple[ChangeTag, str]]:
    """Yield ``(tag, line)`` pairs aligning ``original`` with ``canonical``.

    ``"-"`` marks a line only in ``original``, ``"+"`` a line only in
    ``canonical`` and ``" "`` a line in both. Within a replaced region all
    removals come before all insertions.
    """

    a = split_lines(original)
    b = split_lines(canonical)
    matcher = SequenceMatcher(None, a, b, autojunk=False)
    for op, i1, i2, j1, j2 in matcher.get_opcodes():
        if op == "equal":
            for line in a[i1:i2]:
                yield " ", line
            continue
        for line in a[i1:i2]:
            yield "-", line
        for line in b[j1:j2]:
            yield "+", line


def make_diff(original: str, canonical: str, context_size: int) -> list[Mismatch]:
    """Group the differences between ``original`` and ``canonical``.

    Parameters
    ----------
    original:
        The text as found (its lines become ``Resulting`` entries).
    canonical:
        The formatted text (its lines become ``Expected`` entries).
    context_size:
        Number of unchanged lines kept before and after each change.

    Returns
    -------
    list[Mismatch]
        Empty exactly when both texts have the same lines.
    """

    if context_size < 0:
        raise ValueError(f"context_size must be >= 0, got {context_size}")

    line_number = 1
    line_number_orig = 1
    context_queue: deque[str] = deque()
    lines_since_mismatch = context_size + 1
    results: list[Mismatch] = []
    # Placeholder closed (and discarded) when the first change opens a group.
    mismatch = Mismatch(0, 0)

    for tag, text in line_changes(original, canonical):
        if tag == " ":
            if context_queue and len(context_queue) >= context_size:
                context_queue.popleft()
            if lines_since_mismatch < context_size:
                mismatch.lines.append(Context(text))
            elif context_size > 0:
                context_queue.append(text)
            line_number += 1
            line_number_orig += 1
            lines_since_mismatch += 1
            continue

        if lines_since_mismatch >= context_size and lines_since_mismatch > 0:
            results.append(mismatch)
            mismatch = Mismatch(
                line_number - len(context_queue),
                line_number_orig - len(context_queue),
            )
        while context_queue:
            mismatch.lines.append(Context(context_queue.popleft()))

        if tag == "-":
            mismatch.lines.append(Resulting(text))
            line_number_orig += 1
        else:
            mismatch.lines.append(Expected(text))
            line_number += 1
        lines_since_mismatch = 0

    results.append(mismatch)
    del results[0]

    _logger.debug("diff produced %d mismatch(es)", len(results))
    return results


__all__ = ["ChangeTag", "line_changes", "make_diff"]
