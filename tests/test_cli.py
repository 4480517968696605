from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ledgerfmt.cli import EXIT_DIFFERENCES, EXIT_ERROR, app

RAW = "2024-01-01 Groceries\n  assets:cash  -10.00\n  expenses:food  10.00\n"
CANONICAL = "2024-01-01 Groceries\n    assets:cash    -10.00\n    expenses:food  10.00\n"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def journal() -> Path:
    # Relative to the per-test working directory set up in conftest.
    path = Path("main.journal")
    path.write_text(RAW, encoding="utf-8")
    return path


def test_formats_file_to_stdout(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal)])

    assert result.exit_code == 0, result.output
    assert result.stdout == CANONICAL
    assert journal.read_text(encoding="utf-8") == RAW


def test_formats_stdin(runner: CliRunner):
    result = runner.invoke(app, ["-"], input=RAW)

    assert result.exit_code == 0, result.output
    assert result.stdout == CANONICAL


def test_ledger_file_env(runner: CliRunner, journal: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LEDGER_FILE", str(journal))

    result = runner.invoke(app, [], input="ignored\n")

    assert result.exit_code == 0, result.output
    assert result.stdout == CANONICAL


def test_ledger_file_from_dotenv(runner: CliRunner, journal: Path):
    Path(".env").write_text(f"LEDGER_FILE={journal}\n", encoding="utf-8")

    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    assert result.stdout == CANONICAL


def test_output_file(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal), "-o", "out.journal"])

    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert Path("out.journal").read_text(encoding="utf-8") == CANONICAL


def test_inplace(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal), "--inplace"])

    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert journal.read_text(encoding="utf-8") == CANONICAL
    assert not Path("main.journal.tmp").exists()


def test_check_canonical_journal(runner: CliRunner):
    Path("ok.journal").write_text(CANONICAL, encoding="utf-8")

    result = runner.invoke(app, ["ok.journal", "--check"])

    assert result.exit_code == 0, result.output
    assert result.output == ""


def test_check_reports_differences(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal), "--check", "--color", "never"])

    assert result.exit_code == EXIT_DIFFERENCES
    assert result.stdout.splitlines() == [
        "Diff in main.journal at line 1:",
        " 2024-01-01 Groceries",
        "-  assets:cash  -10.00",
        "-  expenses:food  10.00",
        "+    assets:cash    -10.00",
        "+    expenses:food  10.00",
    ]
    assert journal.read_text(encoding="utf-8") == RAW


def test_check_context_option(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal), "-c", "--context", "0", "--color", "never"])

    assert result.exit_code == EXIT_DIFFERENCES
    assert result.stdout.splitlines()[0] == "Diff in main.journal at line 2:"
    assert " 2024-01-01 Groceries" not in result.stdout.splitlines()


def test_check_context_env(runner: CliRunner, journal: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LEDGERFMT_CONTEXT", "0")

    result = runner.invoke(app, [str(journal), "--check", "--color", "never"])

    assert result.exit_code == EXIT_DIFFERENCES
    assert result.stdout.splitlines()[0] == "Diff in main.journal at line 2:"


def test_invalid_context_env_falls_back_with_warning(
    runner: CliRunner, journal: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("LEDGERFMT_CONTEXT", "many")

    result = runner.invoke(app, [str(journal), "--check", "--color", "never"])

    assert result.exit_code == EXIT_DIFFERENCES
    assert "ignoring invalid LEDGERFMT_CONTEXT" in result.output
    assert "Diff in main.journal at line 1:" in result.output


def test_check_color_always(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal), "--check", "--color", "always"])

    assert result.exit_code == EXIT_DIFFERENCES
    assert "\x1b[" in result.output


def test_format_error_exits_2(runner: CliRunner):
    Path("bad.journal").write_text("2024-01-01 x\nend comment\n", encoding="utf-8")

    result = runner.invoke(app, ["bad.journal"])

    assert result.exit_code == EXIT_ERROR
    assert "bad.journal: unexpected `end comment` at line 2" in result.output


def test_amount_error_exits_2(runner: CliRunner):
    result = runner.invoke(app, ["-"], input="2024-01-01 x\n  assets  1.2.3\n")

    assert result.exit_code == EXIT_ERROR
    assert "invalid amount: '1.2.3'" in result.output


def test_missing_file_exits_2(runner: CliRunner):
    result = runner.invoke(app, ["missing.journal"])

    assert result.exit_code == EXIT_ERROR
    assert "cannot read missing.journal" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["main.journal", "-i", "-o", "out.journal"],
        ["main.journal", "--check", "-o", "out.journal"],
        ["main.journal", "--check", "-i"],
        ["main.journal", "--context", "-1"],
        ["main.journal", "--color", "sometimes"],
    ],
)
def test_usage_errors_exit_2(runner: CliRunner, journal: Path, args: list[str]):
    result = runner.invoke(app, args)

    assert result.exit_code == EXIT_ERROR
    assert journal.read_text(encoding="utf-8") == RAW
    assert not Path("out.journal").exists()


def test_inplace_needs_a_file(runner: CliRunner):
    result = runner.invoke(app, ["-", "-i"], input=RAW)

    assert result.exit_code == EXIT_ERROR
    assert "requires an input file" in result.output


def test_debug_logging_goes_to_stderr(runner: CliRunner, journal: Path):
    result = runner.invoke(app, [str(journal), "--log-level", "DEBUG"])

    assert result.exit_code == 0, result.output
    assert "ledgerfmt.layout DEBUG layout widths" in result.output


def test_invalid_utf8_on_stdin_exits_2(runner: CliRunner):
    result = runner.invoke(app, ["-", "--check"], input=b"2024-01-01 caf\xe9\n  a  1\n")

    assert result.exit_code == EXIT_ERROR
    assert "cannot read <stdin>" in result.output
    assert "Diff in" not in result.output


def test_negative_context_env_falls_back_with_warning(
    runner: CliRunner, journal: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("LEDGERFMT_CONTEXT", "-1")

    result = runner.invoke(app, [str(journal), "--check", "--color", "never"])

    assert result.exit_code == EXIT_DIFFERENCES
    assert "ignoring invalid LEDGERFMT_CONTEXT='-1'" in result.output
    assert "Diff in main.journal at line 1:" in result.output


def test_color_always_overrides_no_color(
    runner: CliRunner, journal: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("NO_COLOR", "1")

    always = runner.invoke(app, [str(journal), "--check", "--color", "always"])
    auto = runner.invoke(app, [str(journal), "--check"])

    assert always.exit_code == EXIT_DIFFERENCES
    assert "\x1b[" in always.output
    assert "\x1b[" not in auto.output
