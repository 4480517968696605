"""Reading journals in and writing canonical text out.

Input comes from a named file, standard input (``-`` or no path), or the file
named by ``LEDGER_FILE`` when no path is given. Output goes to a named file,
back over the input file, or to standard output. In-place writes go to
``<name>.tmp`` first and are moved into place with ``os.replace``.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from .logging_setup import get_logger

LEDGER_FILE_ENV = "LEDGER_FILE"
STDIN_NAME = "<stdin>"

_logger = get_logger("ledgerfmt.sources")


class JournalReadError(OSError):
    """The journal source could not be read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"cannot read {path}: {reason}")


class JournalWriteError(OSError):
    """The formatted journal could not be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"cannot write {path}: {reason}")


@dataclass(frozen=True, slots=True)
class JournalSource:
    """Journal text and where it came from (``path`` is None for stdin)."""

    text: str
    path: Path | None = None

    @property
    def name(self) -> str:
        return os.fspath(self.path) if self.path is not None else STDIN_NAME


def resolve_input_path(
    path: str | os.PathLike[str] | None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the file to read, or None for standard input."""

    if path is not None:
        return None if os.fspath(path) == "-" else Path(path)
    env_path = (env if env is not None else os.environ).get(LEDGER_FILE_ENV)
    if env_path and env_path.strip():
        return Path(env_path.strip()).expanduser()
    return None


def _read_stream(stream: IO[str]) -> str:
    # UTF-8 regardless of locale; CRLF stays as in files.
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer.read().decode("utf-8")
    return stream.read()


def read_journal(
    path: str | os.PathLike[str] | None = None,
    *,
    stdin: IO[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> JournalSource:
    """Read journal text from ``path``, ``LEDGER_FILE`` or standard input.

    Raises
    ------
    JournalReadError
        The file or standard input is unreadable or not valid UTF-8.
    """

    target = resolve_input_path(path, env)
    if target is None:
        stream = stdin if stdin is not None else sys.stdin
        _logger.debug("reading journal from standard input")
        try:
            text = _read_stream(stream)
        except (OSError, UnicodeDecodeError) as exc:
            raise JournalReadError(Path(STDIN_NAME), exc) from exc
        return JournalSource(text=text)

    _logger.debug("reading journal from %s", target)
    try:
        # newline="" keeps CRLF endings visible to the line splitter.
        with open(target, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise JournalReadError(target, exc) from exc
    return JournalSource(text=text, path=target)


def _write_atomic(text: str, target: Path) -> None:
    tmp = target.with_name(target.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        with contextlib.suppress(OSError):
            shutil.copymode(target, tmp)
        os.replace(tmp, target)
    except Exception:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise


def write_journal(
    text: str,
    *,
    output: Path | None = None,
    inplace: Path | None = None,
    stdout: IO[str] | None = None,
) -> None:
    """Write ``text`` to ``output``, over ``inplace``, or to standard output.

    Raises
    ------
    ValueError
        Both ``output`` and ``inplace`` were given.
    JournalWriteError
        The destination could not be written.
    """

    if output is not None and inplace is not None:
        raise ValueError("output and inplace are mutually exclusive")

    if inplace is not None:
        _logger.debug("rewriting %s in place", inplace)
        try:
            _write_atomic(text, inplace)
        except OSError as exc:
            raise JournalWriteError(inplace, exc) from exc
        return

    if output is not None:
        _logger.debug("writing formatted journal to %s", output)
        try:
            with open(output, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as exc:
            raise JournalWriteError(output, exc) from exc
        return

    (stdout if stdout is not None else sys.stdout).write(text)


__all__ = [
    "LEDGER_FILE_ENV",
    "STDIN_NAME",
    "JournalReadError",
    "JournalWriteError",
    "JournalSource",
    "resolve_input_path",
    "read_journal",
    "write_journal",
]
