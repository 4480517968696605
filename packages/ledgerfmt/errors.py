"""Errors raised by the formatting core.

Every error here aborts :func:`ledgerfmt.format_journal` as a whole; the core
never hands back a partially canonicalized buffer. I/O failures are not part of
this hierarchy, see :mod:`ledgerfmt.sources`.
"""

from __future__ import annotations


class FormatError(Exception):
    """Base class for journals that cannot be canonicalized."""


class UnterminatedCommentBlock(FormatError):
    """A ``comment`` block is still open at end of input."""

    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(f"unterminated comment block opened at line {line}")


class UnexpectedEndComment(FormatError):
    """``end comment`` seen while no comment block is open."""

    def __init__(self, line: int, text: str = "end comment") -> None:
        self.line = line
        self.text = text
        super().__init__(f"unexpected `{text}` at line {line}")


class UndeterminedLineKind(FormatError):
    """A line reached the renderer without a kind."""

    def __init__(self, line: int | None = None) -> None:
        self.line = line
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"line kind undetermined{where}")


class AmountParseError(FormatError, ValueError):
    """An amount token has no numeric part or does not form a valid number."""

    def __init__(self, token: str, reason: str | None = None) -> None:
        self.token = token
        self.reason = reason
        msg = f"invalid amount: {token!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


__all__ = [
    "FormatError",
    "UnterminatedCommentBlock",
    "UnexpectedEndComment",
    "UndeterminedLineKind",
    "AmountParseError",
]
