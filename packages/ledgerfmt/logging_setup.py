"""Logging for ``ledgerfmt``: one stderr handler on the ``"ledgerfmt"`` logger.

stdout carries the formatted journal or the check report, so diagnostics never
go there. The CLI calls :func:`configure_logging` once per run; the formatting
modules only ask :func:`get_logger` for ``"ledgerfmt.<module>"`` children and
log at debug level (line counts, column widths, mismatch counts, write
targets). Embedded use stays silent until the host configures logging.

The level comes from the ``--log-level`` option, then ``LEDGERFMT_LOG_LEVEL``,
then ``WARNING``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledgerfmt"
_LEVEL_ENV = "LEDGERFMT_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv(_LEVEL_ENV)
    if isinstance(level, str):
        # "debug", "INFO" or "10"; anything else falls through to WARNING.
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = getattr(logging, name, None)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the ledgerfmt handler; later calls are no-ops.

    Parameters
    ----------
    level:
        Level number or name (``"DEBUG"``). ``None`` reads
        ``LEDGERFMT_LOG_LEVEL`` and defaults to ``WARNING``.
    fmt:
        Record format, ``"%(asctime)s %(name)s %(levelname)s %(message)s"``
        when omitted.
    stream:
        Where records go; ``sys.stderr`` as of the call when omitted.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    # Drop the placeholder installed by get_logger().
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Not forwarded to the root logger.
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Remove every ledgerfmt handler so :func:`configure_logging` can run again."""

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return logger ``name``, keeping ``"ledgerfmt"`` quiet until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
