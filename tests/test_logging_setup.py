import io
import logging

import pytest

from ledgerfmt.logging_setup import configure_logging, get_logger


def test_library_use_is_silent_until_configured():
    get_logger("ledgerfmt.test")

    handlers = logging.getLogger("ledgerfmt").handlers
    assert handlers
    assert all(isinstance(h, logging.NullHandler) for h in handlers)


def test_configure_logging_once():
    first = io.StringIO()
    second = io.StringIO()

    configure_logging("DEBUG", fmt="%(name)s:%(message)s", stream=first)
    configure_logging("ERROR", stream=second)
    get_logger("ledgerfmt.test").debug("hello")

    assert first.getvalue() == "ledgerfmt.test:hello\n"
    assert second.getvalue() == ""
    assert logging.getLogger("ledgerfmt").propagate is False


@pytest.mark.parametrize(
    ("env", "level"),
    [
        ("info", logging.INFO),
        ("10", logging.DEBUG),
        ("loud", logging.WARNING),
        ("", logging.WARNING),
    ],
)
def test_level_from_environment(monkeypatch: pytest.MonkeyPatch, env: str, level: int):
    monkeypatch.setenv("LEDGERFMT_LOG_LEVEL", env)

    configure_logging(stream=io.StringIO())

    assert logging.getLogger("ledgerfmt").level == level


def test_explicit_level_beats_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LEDGERFMT_LOG_LEVEL", "DEBUG")

    configure_logging(logging.ERROR, stream=io.StringIO())

    assert logging.getLogger("ledgerfmt").level == logging.ERROR


def test_default_format_and_level():
    buf = io.StringIO()

    configure_logging(stream=buf)
    get_logger("ledgerfmt.layout").info("hidden")
    get_logger("ledgerfmt.layout").warning("shown")

    assert buf.getvalue().endswith(" ledgerfmt.layout WARNING shown\n")
    assert "hidden" not in buf.getvalue()
