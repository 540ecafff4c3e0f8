"""Build orchestration for the Verilator simulator."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from boom_verifier.configuration.runtime_settings import SimulatorSettings

CommandRunner = Callable[[tuple[str, ...], Path], tuple[int, str]]


class BuildError(Exception):
    """Raised when the build command cannot be launched."""


@dataclass(frozen=True)
class BuildResult:
    """Exit status and captured stdout of the build command."""

    succeeded: bool
    stdout: str


def build_simulator(
    settings: SimulatorSettings,
    config_name: str,
    *,
    run_command: CommandRunner | None = None,
) -> BuildResult:
    """Run ``make -j<jobs> CONFIG=<config_name>`` in the simulator directory."""
    command_runner = run_command or _run_captured_command
    command = build_command(settings, config_name)
    exit_code, stdout = command_runner(command, settings.directory)
    return BuildResult(succeeded=exit_code == 0, stdout=stdout)


def build_command(settings: SimulatorSettings, config_name: str) -> tuple[str, ...]:
    return (
        *shlex.split(settings.make_command),
        f"-j{settings.build_jobs}",
        f"CONFIG={config_name}",
    )


def _run_captured_command(command: tuple[str, ...], cwd: Path) -> tuple[int, str]:
    """Run one build command and wrap launch errors with domain-friendly messages."""
    try:
        completed = subprocess.run(
            list(command),
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        command_text = shlex.join(command)
        raise BuildError(f"Build command could not be launched: {command_text}: {exc}") from exc
    return completed.returncode, completed.stdout.decode("utf-8", errors="replace")
