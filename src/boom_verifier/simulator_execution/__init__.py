"""Simulator execution domain exports."""

from .execution_outcomes import RunOutcome, SimulationResult, SpawnError
from .parallel_runner import ParallelSimulationRunner, default_parallelism
from .simulator_worker import execute_simulation

__all__ = [
    "RunOutcome",
    "SimulationResult",
    "SpawnError",
    "ParallelSimulationRunner",
    "default_parallelism",
    "execute_simulation",
]
