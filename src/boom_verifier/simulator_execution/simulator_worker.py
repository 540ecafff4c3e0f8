"""Single simulator invocation."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .execution_outcomes import SimulationResult, SpawnError


def execute_simulation(
    executable: Path | str,
    artifact_path: Path | str,
    timeout_seconds: float | None = None,
) -> SimulationResult:
    """Run `executable artifact_path` and capture its exit status and stdout.

    Stdin is closed and stderr is discarded. Success is judged by the exit
    status alone.

    Raises:
      SpawnError: If the process cannot be launched, exceeds the timeout, or
        writes stdout that is not valid UTF-8.
    """
    command = [os.fspath(Path(executable).absolute()), os.fspath(artifact_path)]
    try:
        completed = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise SpawnError(
            f"Simulator timed out after {timeout_seconds}s on {artifact_path}"
        ) from exc
    except OSError as exc:
        raise SpawnError(f"Failed to launch simulator {command[0]}: {exc}") from exc

    try:
        stdout = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SpawnError(f"Simulator output for {artifact_path} is not valid UTF-8") from exc
    return SimulationResult(exit_code=completed.returncode, stdout=stdout)
