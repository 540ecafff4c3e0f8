"""Simulator execution entities."""

from __future__ import annotations

from dataclasses import dataclass

from boom_verifier.artifact_discovery.artifact_models import Artifact
from boom_verifier.metric_parsing.metric_models import MetricSet


class SpawnError(Exception):
    """Raised when the simulator cannot be launched or its output cannot be read."""


@dataclass(frozen=True)
class SimulationResult:
    """Raw exit status and decoded stdout of one simulator process."""

    exit_code: int
    stdout: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class RunOutcome:
    """Outcome of executing one artifact on the simulator."""

    artifact: Artifact
    succeeded: bool
    stdout: str | None
    metrics: MetricSet
    error_message: str | None = None

    @property
    def name(self) -> str:
        return self.artifact.name

    @staticmethod
    def completed(
        artifact: Artifact,
        result: SimulationResult,
        metrics: MetricSet | None = None,
    ) -> RunOutcome:
        return RunOutcome(
            artifact=artifact,
            succeeded=result.succeeded,
            stdout=result.stdout,
            metrics=metrics or MetricSet.zero(),
        )

    @staticmethod
    def spawn_failed(artifact: Artifact, error: Exception) -> RunOutcome:
        return RunOutcome(
            artifact=artifact,
            succeeded=False,
            stdout=None,
            metrics=MetricSet.zero(),
            error_message=str(error),
        )
