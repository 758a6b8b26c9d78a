"""
Tests for the language file commands.
"""

from typing import Generator, Final
from pathlib import Path
import io
import re
import textwrap
import click
import pytest
from unittest.mock import patch
from click.testing import CliRunner
from rich.console import Console
from borr.commands import document as commands
from borr.commands.app import cli

ERROR_PARSE: Final[str] = "Failed to parse language file"
ERROR_NOT_FOUND: Final[str] = "Translation '{0}:{1}' not found"

LANG_FILE: Final[str] = textwrap.dedent(
    """\
    lang_id = "en_GB"
    lang_desc = "English (Great Britain)"
    lang_ver = "1.0.1"

    [normal_tests]
    hello = "Hello"
    copyright_info[] = "Copyright (c) Simon Cahill"
    copyright_info[] = "MIT License"

    [variables_tests]
    greeting = "${normal_tests:hello}, ${who}!"
    loop = "${variables_tests:loop}"
    """
)


@pytest.fixture
def runner() -> CliRunner:
    """Provides a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def lang_file(tmp_path: Path) -> Path:
    """Writes the sample language file."""
    path = tmp_path / "en_GB.borr"
    path.write_text(LANG_FILE, encoding="utf-8")
    return path


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


@pytest.fixture
def captured_output() -> Generator[io.StringIO, None, None]:
    """Captures console output."""
    output = io.StringIO()
    console = Console(file=output, width=200)
    with patch("borr.commands.document.console", console):
        yield output


def test_cli_command_group(runner: CliRunner) -> None:
    """Test the command group structure."""
    assert isinstance(cli, click.Group)
    for cmd in ["show", "sections", "get", "check"]:
        assert cmd in cli.commands

    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "borr Language Files" in result.output


def test_show(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["show", str(lang_file)])
    output = strip_ansi(captured_output.getvalue())

    assert result.exit_code == 0
    assert "Selected language: en_GB" in output
    assert "Language description: English (Great Britain)" in output
    assert "Language version: v1.0.1" in output
    assert "[normal_tests]" in output
    assert "hello: Hello" in output
    assert "greeting: Hello, !" in output
    assert "Cyclic expansion" in output


def test_sections(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["sections", str(lang_file)])
    output = strip_ansi(captured_output.getvalue())

    assert result.exit_code == 0
    assert "normal_tests: 2 field(s)" in output
    assert "variables_tests: 2 field(s)" in output


def test_sections_empty(runner: CliRunner, tmp_path: Path, captured_output: io.StringIO) -> None:
    path = tmp_path / "empty.borr"
    path.write_text('lang_id = "xx"\n', encoding="utf-8")
    result = runner.invoke(cli, ["sections", str(path)])

    assert result.exit_code == 0
    assert "No sections found" in strip_ansi(captured_output.getvalue())


def test_get_expanded(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(
        cli, ["get", str(lang_file), "variables_tests", "greeting", "-D", "who=World"]
    )
    assert result.exit_code == 0
    assert strip_ansi(captured_output.getvalue()).strip() == "Hello, World!"


def test_get_raw(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(
        cli, ["get", str(lang_file), "variables_tests", "greeting", "--raw"]
    )
    assert result.exit_code == 0
    assert (
        strip_ansi(captured_output.getvalue()).strip()
        == "${normal_tests:hello}, ${who}!"
    )


def test_get_multiline(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["get", str(lang_file), "normal_tests", "copyright_info"])
    assert result.exit_code == 0
    assert strip_ansi(captured_output.getvalue()).splitlines() == [
        "Copyright (c) Simon Cahill",
        "MIT License",
    ]


def test_get_not_found(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["get", str(lang_file), "normal_tests", "nope"])
    assert result.exit_code == 1
    assert ERROR_NOT_FOUND.format("normal_tests", "nope") in strip_ansi(
        captured_output.getvalue()
    )


def test_get_cycle(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["get", str(lang_file), "variables_tests", "loop"])
    assert result.exit_code == 1
    assert "Cyclic expansion" in strip_ansi(captured_output.getvalue())


def test_get_bad_define(runner: CliRunner, lang_file: Path) -> None:
    result = runner.invoke(
        cli, ["get", str(lang_file), "variables_tests", "greeting", "-D", "novalue"]
    )
    assert result.exit_code == 2
    assert "NAME=VALUE" in result.output


def test_check_clean(runner: CliRunner, lang_file: Path, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["check", str(lang_file)])
    assert result.exit_code == 0
    assert "no problems found" in strip_ansi(captured_output.getvalue())


def test_check_warnings(runner: CliRunner, tmp_path: Path, captured_output: io.StringIO) -> None:
    path = tmp_path / "broken.borr"
    path.write_text('[s]\nthis is broken\nok = "fine"\n', encoding="utf-8")
    result = runner.invoke(cli, ["check", str(path)])

    assert result.exit_code == 1
    assert "line 2: unrecognized line: this is broken" in strip_ansi(
        captured_output.getvalue()
    )


@pytest.mark.parametrize("command", ["show", "sections", "check"])
def test_missing_file(
    runner: CliRunner, tmp_path: Path, captured_output: io.StringIO, command: str
) -> None:
    result = runner.invoke(cli, [command, str(tmp_path / "missing.borr")])
    assert result.exit_code == 1
    assert ERROR_PARSE in strip_ansi(captured_output.getvalue())


def test_malformed_version(runner: CliRunner, tmp_path: Path, captured_output: io.StringIO) -> None:
    path = tmp_path / "bad.borr"
    path.write_text('lang_ver = "1.0"\n', encoding="utf-8")
    result = runner.invoke(cli, ["show", str(path)])

    assert result.exit_code == 1
    assert "Malformed language version" in strip_ansi(captured_output.getvalue())


@pytest.mark.parametrize(
    "command,args,error_message",
    [
        ("get", [], "Missing argument"),
        ("get", ["file", "section"], "Missing argument"),
        ("show", [], "Missing argument"),
        ("show", ["a", "b"], "Got unexpected extra argument"),
    ],
)
def test_command_validation(
    runner: CliRunner, command: str, args: list[str], error_message: str
) -> None:
    result = runner.invoke(commands.__dict__[command], args)
    assert result.exit_code != 0
    assert error_message in result.output
