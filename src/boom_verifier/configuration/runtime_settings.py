"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SIMULATOR_NAME_PREFIX = "simulator-example-"


@dataclass(frozen=True)
class SimulatorSettings:
    """Where the simulator lives and how it is built."""

    directory: Path
    make_command: str
    build_jobs: int

    def executable_for(self, config_name: str) -> Path:
        """Path of the simulator binary produced for a design config."""
        return self.directory / f"{SIMULATOR_NAME_PREFIX}{config_name}"


@dataclass(frozen=True)
class SuiteSettings:
    """Artifact location of one suite."""

    root: Path | None
    pattern: str
    exclude_suffix: str | None


@dataclass(frozen=True)
class ExecutionSettings:
    """Worker pool sizing and the optional per-run watchdog."""

    parallelism: int
    timeout_seconds: int | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    simulator: SimulatorSettings
    assembly: SuiteSettings
    benchmark: SuiteSettings
    execution: ExecutionSettings
