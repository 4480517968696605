"""Pytest configuration for test isolation.

The CLI reads ``LEDGER_FILE``, ``LEDGERFMT_CONTEXT`` and
``LEDGERFMT_LOG_LEVEL`` from the environment (and from a ``.env`` in the
working directory), and configures the package logger once per process. Any of
these leaking in from the developer's shell or from an earlier test would
change what a test reads and prints, so every test runs in its own temporary
working directory with those variables cleared and logging reset.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `ledgerfmt` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root on sys.path so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from ledgerfmt.logging_setup import reset_logging  # noqa: E402

_ENV_VARS = ("LEDGER_FILE", "LEDGERFMT_CONTEXT", "LEDGERFMT_LOG_LEVEL", "NO_COLOR")


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear ledgerfmt env vars and run from an empty per-test directory."""

    for name in _ENV_VARS:
        # setenv first so teardown also drops values loaded from a test's .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture(autouse=True)
def _reset_logging():
    reset_logging()
    yield
    reset_logging()
