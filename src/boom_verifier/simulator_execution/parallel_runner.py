"""Bounded-parallel execution of artifacts on the simulator."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from boom_verifier.artifact_discovery.artifact_models import Artifact
from boom_verifier.metric_parsing import MetricSet, ParseError, parse_metrics

from .execution_outcomes import RunOutcome, SimulationResult, SpawnError
from .simulator_worker import execute_simulation

SimulationExecutor = Callable[[Path, Path, float | None], SimulationResult]

_LOGGER = logging.getLogger(__name__)


def default_parallelism() -> int:
    return max(1, os.cpu_count() or 1)


class ParallelSimulationRunner:  # pylint: disable=too-few-public-methods
    """Runs every artifact on a bounded thread pool and returns outcomes in input order."""

    def __init__(
        self,
        *,
        parallelism: int | None = None,
        timeout_seconds: float | None = None,
        execute: SimulationExecutor | None = None,
    ) -> None:
        self._parallelism = max(1, parallelism or default_parallelism())
        self._timeout_seconds = timeout_seconds
        self._execute = execute or execute_simulation

    def run_all(
        self,
        artifacts: Sequence[Artifact],
        executable: Path,
        *,
        collect_metrics: bool = False,
    ) -> tuple[RunOutcome, ...]:
        """Execute all artifacts and wait for every task before returning.

        Failures never cancel sibling tasks. The returned outcomes follow the
        order of `artifacts`, not completion order.
        """
        if not artifacts:
            return ()
        futures: list[Future[RunOutcome]] = []
        with ThreadPoolExecutor(max_workers=self._parallelism) as executor:
            for artifact in artifacts:
                futures.append(
                    executor.submit(self._run_single, artifact, executable, collect_metrics)
                )
            wait(futures)
        return tuple(future.result() for future in futures)

    def _run_single(
        self, artifact: Artifact, executable: Path, collect_metrics: bool
    ) -> RunOutcome:
        try:
            result = self._execute(executable, artifact.path, self._timeout_seconds)
        except SpawnError as exc:
            _LOGGER.warning("%s: %s", artifact.name, exc)
            return RunOutcome.spawn_failed(artifact, exc)

        metrics = MetricSet.zero()
        if collect_metrics and result.succeeded:
            metrics = _parse_or_zero(artifact, result.stdout)
        return RunOutcome.completed(artifact, result, metrics)


def _parse_or_zero(artifact: Artifact, stdout: str) -> MetricSet:
    try:
        return parse_metrics(stdout)
    except ParseError as exc:
        _LOGGER.warning("%s: metrics unavailable, %s", artifact.name, exc)
        return MetricSet.zero()
