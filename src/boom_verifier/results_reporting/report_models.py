"""Results reporting entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from boom_verifier.simulator_execution.execution_outcomes import RunOutcome


class TerminationPolicy(str, Enum):
    """Whether reporting stops at the first failed outcome."""

    TERMINATE_ON_FIRST_FAILURE = "terminate-on-first-failure"
    RUN_TO_COMPLETION = "run-to-completion"

    @staticmethod
    def from_flag(terminate: bool) -> TerminationPolicy:
        if terminate:
            return TerminationPolicy.TERMINATE_ON_FIRST_FAILURE
        return TerminationPolicy.RUN_TO_COMPLETION


class SuiteCategory(str, Enum):
    """Suite kind; selects the report line format."""

    BUILD = "build"
    ASSEMBLY = "assembly"
    BENCHMARK = "benchmark"
    PROBE = "probe"


@dataclass(frozen=True)
class ReportLine:
    """Formatted report text with its destinations."""

    text: str
    write_to_log: bool = True
    write_to_console: bool = False


@dataclass(frozen=True)
class SuiteReport:
    """Outcomes of one suite that made it into the report."""

    category: SuiteCategory
    outcomes: tuple[RunOutcome, ...]


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    simulator_path: Path
    log_path: Path | None
    policy: TerminationPolicy
    exit_code: int
