"""CLI orchestration integration tests."""

from __future__ import annotations

import stat
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from boom_verifier.cli import cli, main

CONFIG_NAME = "TestConfig"

_SIMULATOR_SCRIPT = """#!/bin/sh
case "$1" in
  *fail*) echo "*** FAILED *** $1"; exit 1 ;;
esac
cat "$1"
exit 0
"""


def _write_simulator(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    simulator = directory / f"simulator-example-{CONFIG_NAME}"
    simulator.write_text(_SIMULATOR_SCRIPT, encoding="utf-8")
    simulator.chmod(simulator.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return simulator


def _write_workspace(tmp_path: Path) -> Path:
    _write_simulator(tmp_path / "sim")
    isa = tmp_path / "isa"
    isa.mkdir()
    for name in ("rv64ui-p-add", "rv64ui-p-add.dump", "rv64ui-p-fail", "rv64ui-p-sub"):
        (isa / name).write_text("*** PASSED ***\n", encoding="utf-8")
    bench = tmp_path / "bench"
    bench.mkdir()
    (bench / "vvadd.riscv").write_text(
        "vvadd_opt(): 0 1 2 3 4 5 1000 4.0\nAQ x 3\nBQ x 1\nAQ x 2\n", encoding="utf-8"
    )
    (bench / "towers.riscv").write_text("mcycle = 7000\nminstret = 3500\n", encoding="utf-8")
    settings = tmp_path / "verifier.yaml"
    settings.write_text(
        "simulator:\n"
        "  directory: sim\n"
        "suites:\n"
        "  assembly:\n"
        "    root: isa\n"
        "  benchmark:\n"
        "    root: bench\n"
        "execution:\n"
        "  parallelism: 2\n",
        encoding="utf-8",
    )
    return settings


def test_assembly_run_to_completion_writes_every_line(tmp_path: Path) -> None:
    settings = _write_workspace(tmp_path)
    log_path = tmp_path / "run.log"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["run", "-c", CONFIG_NAME, "-o", str(log_path), "-a", "--settings", str(settings)],
    )

    assert result.exit_code == 0, result.output
    assert log_path.read_text(encoding="utf-8").splitlines() == [
        "rv64ui-p-add: PASS",
        "rv64ui-p-fail: FAIL",
        "rv64ui-p-sub: PASS",
    ]
    assert "Running ISA Assembly Tests" in result.output
    assert "rv64ui-p-add: PASS" not in result.output


def test_terminate_flag_stops_after_first_failure(tmp_path: Path) -> None:
    settings = _write_workspace(tmp_path)
    log_path = tmp_path / "run.log"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["run", "-c", CONFIG_NAME, "-o", str(log_path), "-a", "-b", "-t", "-p"]
        + ["--settings", str(settings)],
    )

    assert result.exit_code == 1
    assert log_path.read_text(encoding="utf-8").splitlines() == [
        "rv64ui-p-add: PASS",
        "rv64ui-p-fail: FAIL",
    ]
    assert "rv64ui-p-fail: FAIL" in result.output
    assert "Running Benchmark Suite" not in result.output


def test_benchmark_suite_reports_metrics_and_writes_workbook(tmp_path: Path) -> None:
    settings = _write_workspace(tmp_path)
    log_path = tmp_path / "run.log"
    workbook_path = tmp_path / "results.xlsx"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "run",
            "--config",
            CONFIG_NAME,
            "--output",
            str(log_path),
            "--bmark",
            "--print",
            "--settings",
            str(settings),
            "--workbook",
            str(workbook_path),
        ],
    )

    assert result.exit_code == 0, result.output
    expected = [
        "towers.riscv: true, CC=7000, insts=3500, AQ=0, BQ=0",
        "vvadd.riscv: true, CC=1000, insts=250, AQ=5, BQ=1",
    ]
    assert log_path.read_text(encoding="utf-8").splitlines() == expected
    for line in expected:
        assert line in result.output
    workbook = load_workbook(workbook_path)
    assert workbook.sheetnames == ["benchmark", "RunInfo"]


def test_command_line_roots_override_settings(tmp_path: Path) -> None:
    settings = _write_workspace(tmp_path)
    other_isa = tmp_path / "other-isa"
    other_isa.mkdir()
    (other_isa / "rv64um-p-mul").write_text("", encoding="utf-8")
    log_path = tmp_path / "run.log"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["run", "-c", CONFIG_NAME, "-o", str(log_path), "-a", "-j", "1"]
        + ["--settings", str(settings), "--isa-root", str(other_isa)],
    )

    assert result.exit_code == 0, result.output
    assert log_path.read_text(encoding="utf-8") == "rv64um-p-mul: PASS\n"


def test_spectre_probe_failure_logs_captured_output(tmp_path: Path) -> None:
    settings = _write_workspace(tmp_path)
    probe = tmp_path / "spectre-fail"
    probe.write_text("", encoding="utf-8")
    log_path = tmp_path / "run.log"

    exit_code = main(
        ["run", "-c", CONFIG_NAME, "-o", str(log_path), "-s", str(probe), "-t"]
        + ["--settings", str(settings)]
    )

    assert exit_code == 1
    assert log_path.read_text(encoding="utf-8") == (
        f"Spectre Attack: FAIL\n*** FAILED *** {probe}\n\n"
    )


def test_missing_simulator_is_reported_with_exit_code_one(tmp_path: Path, capsys) -> None:
    settings = _write_workspace(tmp_path)

    exit_code = main(
        ["run", "-c", "UnbuiltConfig", "-o", str(tmp_path / "run.log"), "-a"]
        + ["--settings", str(settings)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Cannot find verilator executable" in captured.err


def test_compile_flag_runs_build_command_before_suites(tmp_path: Path) -> None:
    settings = _write_workspace(tmp_path)
    settings.write_text(
        settings.read_text(encoding="utf-8").replace(
            "simulator:\n  directory: sim\n",
            "simulator:\n  directory: sim\n  make_command: \"sh -c 'echo built $2' make\"\n",
        ),
        encoding="utf-8",
    )
    log_path = tmp_path / "run.log"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["run", "-c", CONFIG_NAME, "-o", str(log_path), "-x", "--settings", str(settings)],
    )

    assert result.exit_code == 0, result.output
    assert f"Building Verilator simulator with CONFIG={CONFIG_NAME}" in result.output
    assert log_path.read_text(encoding="utf-8") == "Verilator Build: PASS\n"


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    output_path = tmp_path / "verifier.yaml"
    runner = CliRunner()

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "verifier.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
