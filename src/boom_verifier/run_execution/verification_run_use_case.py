"""Verification run use-case service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from boom_verifier.artifact_discovery import Artifact, DiscoveryError, discover, suffix_exclusion
from boom_verifier.configuration.runtime_settings import SimulatorSettings, SuiteSettings
from boom_verifier.results_reporting import (
    EXIT_FAILURE,
    EXIT_OK,
    ReportSinks,
    RunMetadata,
    SuiteCategory,
    SuiteReport,
    format_build_lines,
    outcomes_to_report,
    report,
    write_results_workbook,
)
from boom_verifier.simulator_build import BuildError, BuildResult, build_simulator
from boom_verifier.simulator_execution import ParallelSimulationRunner, RunOutcome

from .run_contracts import VerificationRequest

SimulatorBuilder = Callable[[SimulatorSettings, str], BuildResult]

ASSEMBLY_BANNER = "Running ISA Assembly Tests"
BENCHMARK_BANNER = "Running Benchmark Suite"
PROBE_BANNER = "Running Spectre Attack"


class VerificationRunError(Exception):
    """Raised when a verification run cannot be completed."""


class PreconditionError(VerificationRunError):
    """Raised when a required input is missing before any test executes."""


@dataclass
class _SuiteContext:
    """State shared by the suites of one run."""

    request: VerificationRequest
    sinks: ReportSinks
    runner: ParallelSimulationRunner
    simulator: Path
    reported: list[SuiteReport] = field(default_factory=list)


def execute_verification_run(
    request: VerificationRequest,
    sinks: ReportSinks,
    *,
    runner: ParallelSimulationRunner | None = None,
    builder: SimulatorBuilder | None = None,
) -> int:
    """Build (optionally), then run the requested suites and return the process exit code.

    Raises:
      PreconditionError: If the simulator or probe binary is missing, or the
        build cannot be launched.
      VerificationRunError: If a suite cannot start.
    """
    configuration = request.configuration
    resolved_runner = runner or ParallelSimulationRunner(
        parallelism=configuration.execution.parallelism,
        timeout_seconds=configuration.execution.timeout_seconds,
    )
    resolved_builder = builder or build_simulator
    run_start = datetime.now(UTC)
    context = _SuiteContext(
        request=request,
        sinks=sinks,
        runner=resolved_runner,
        simulator=configuration.simulator.executable_for(request.config_name),
    )

    # Suites already reported still reach the workbook when a later one aborts.
    exit_code = EXIT_FAILURE
    try:
        exit_code = _execute_run(context, resolved_builder)
    finally:
        if request.workbook_path is not None:
            write_results_workbook(
                request.workbook_path,
                context.reported,
                RunMetadata(
                    run_start=run_start,
                    simulator_path=context.simulator,
                    log_path=request.log_path,
                    policy=request.policy,
                    exit_code=exit_code,
                ),
            )
    return exit_code


def _execute_run(context: _SuiteContext, builder: SimulatorBuilder) -> int:
    request = context.request
    if request.build:
        exit_code = _build_simulator(context, builder)
        if exit_code != EXIT_OK:
            return exit_code

    if not context.simulator.exists():
        raise PreconditionError(
            f"Cannot find verilator executable for that config. Compile needed? "
            f"({context.simulator})"
        )

    if request.run_assembly:
        exit_code = _run_discovered_suite(
            context,
            SuiteCategory.ASSEMBLY,
            request.configuration.assembly,
            banner=ASSEMBLY_BANNER,
            missing_root_hint="set $RISCV, suites.assembly.root or --isa-root",
        )
        if exit_code != EXIT_OK:
            return exit_code

    if request.run_benchmark:
        exit_code = _run_discovered_suite(
            context,
            SuiteCategory.BENCHMARK,
            request.configuration.benchmark,
            banner=BENCHMARK_BANNER,
            missing_root_hint="set suites.benchmark.root or --bmark-root",
        )
        if exit_code != EXIT_OK:
            return exit_code

    if request.probe_path is not None:
        return _run_probe(context, request.probe_path)
    return EXIT_OK


def _build_simulator(context: _SuiteContext, builder: SimulatorBuilder) -> int:
    request = context.request
    context.sinks.announce(f"Building Verilator simulator with CONFIG={request.config_name}")
    try:
        result = builder(request.configuration.simulator, request.config_name)
    except BuildError as exc:
        raise PreconditionError(str(exc)) from exc
    for line in format_build_lines(
        result.succeeded, result.stdout, echo=context.sinks.echo_to_console
    ):
        context.sinks.emit(line)
    return EXIT_OK if result.succeeded else EXIT_FAILURE


def _run_discovered_suite(
    context: _SuiteContext,
    category: SuiteCategory,
    settings: SuiteSettings,
    *,
    banner: str,
    missing_root_hint: str,
) -> int:
    context.sinks.announce(banner)
    if settings.root is None:
        raise PreconditionError(
            f"No artifact root configured for the {category.value} suite: {missing_root_hint}"
        )
    try:
        artifacts = discover(
            settings.root, settings.pattern, suffix_exclusion(settings.exclude_suffix)
        )
    except DiscoveryError as exc:
        raise VerificationRunError(str(exc)) from exc
    outcomes = context.runner.run_all(
        artifacts,
        context.simulator,
        collect_metrics=category is SuiteCategory.BENCHMARK,
    )
    return _report_suite(context, category, outcomes)


def _run_probe(context: _SuiteContext, probe_path: Path) -> int:
    context.sinks.announce(PROBE_BANNER)
    if not probe_path.exists():
        raise PreconditionError(f"Cannot find Spectre executable: {probe_path}")
    outcomes = context.runner.run_all((Artifact(path=probe_path),), context.simulator)
    return _report_suite(context, SuiteCategory.PROBE, outcomes)


def _report_suite(
    context: _SuiteContext, category: SuiteCategory, outcomes: tuple[RunOutcome, ...]
) -> int:
    policy = context.request.policy
    context.reported.append(SuiteReport(category, outcomes_to_report(outcomes, policy)))
    return report(outcomes, policy, context.sinks, category)
