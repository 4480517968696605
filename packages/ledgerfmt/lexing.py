"""Comment splitting and field tokenization for journal lines."""

from __future__ import annotations

import re
from enum import Enum

from .models import Comment, CommentBody, ContentBody, Delimiter, LineBody

# Fields are separated by two or more spaces; single spaces belong to the field
# (multi-word account names, ``$ 10``).
_FIELD_SEP_RE = re.compile(r" {2,}")
_COMMENT_MARKERS = ";#"
_DELIMITERS = {";": Delimiter.SEMICOLON, "#": Delimiter.HASH}


class BlockToggle(Enum):
    OPEN = "comment"
    CLOSE = "end comment"


def block_toggle(line: str) -> BlockToggle | None:
    """Return the toggle a stand-alone ``comment`` / ``end comment`` line means."""

    word = line.strip().lower()
    for toggle in BlockToggle:
        if word == toggle.value:
            return toggle
    return None


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n``, dropping one ``\\r`` per line end.

    A trailing newline does not produce a final empty line.
    """

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def split_comment(line: str, *, in_block: bool = False) -> LineBody:
    """Separate ``line`` into content and comment.

    Lines inside a comment block, and lines whose first non-blank character is
    ``;`` or ``#``, are whole-line comments kept verbatim (right-trimmed).
    Otherwise the first ``;`` or ``#`` starts a trailing comment.
    """

    if in_block or line.lstrip().startswith(tuple(_COMMENT_MARKERS)):
        return CommentBody(Comment(Delimiter.NONE, line.rstrip()))

    for i, ch in enumerate(line):
        if ch in _COMMENT_MARKERS:
            return ContentBody(
                content=line[:i].rstrip(),
                trailing=Comment(_DELIMITERS[ch], line[i + 1 :].rstrip()),
            )
    return ContentBody(content=line.rstrip())


def tokenize(content: str) -> list[str]:
    """Split non-comment content into fields on runs of two or more spaces."""

    return [f for f in (part.strip() for part in _FIELD_SEP_RE.split(content)) if f]


__all__ = ["BlockToggle", "block_toggle", "split_lines", "split_comment", "tokenize"]
