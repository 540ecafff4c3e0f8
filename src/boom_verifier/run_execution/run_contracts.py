"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from boom_verifier.configuration.runtime_settings import Configuration
from boom_verifier.results_reporting.report_models import TerminationPolicy


@dataclass(frozen=True)
class VerificationRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for executing one verification run."""

    config_name: str
    configuration: Configuration
    build: bool = False
    run_assembly: bool = False
    run_benchmark: bool = False
    probe_path: Path | None = None
    policy: TerminationPolicy = TerminationPolicy.RUN_TO_COMPLETION
    log_path: Path | None = None
    workbook_path: Path | None = None
