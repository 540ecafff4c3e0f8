"""CLI smoke tests."""

from click.testing import CliRunner
from boom_verifier.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "run" in result.output


def test_run_help_lists_suite_selection_flags() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--help"])

    assert result.exit_code == 0
    for option in ("--config", "--output", "--compile", "--asm", "--bmark", "--spectre"):
        assert option in result.output
    assert "--terminate" in result.output
    assert "--print" in result.output
