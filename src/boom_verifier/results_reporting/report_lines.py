"""Report line formatting per suite category."""

from __future__ import annotations

from boom_verifier.simulator_execution.execution_outcomes import RunOutcome

from .report_models import ReportLine, SuiteCategory

PROBE_LABEL = "Spectre Attack"
BUILD_LABEL = "Verilator Build"


def pass_fail(succeeded: bool) -> str:
    return "PASS" if succeeded else "FAIL"


def format_outcome(outcome: RunOutcome, category: SuiteCategory, *, echo: bool) -> ReportLine:
    """Render one outcome in its suite's line format."""
    if category is SuiteCategory.BENCHMARK:
        text = format_benchmark_text(outcome)
    elif category is SuiteCategory.PROBE:
        text = format_probe_text(outcome)
    else:
        text = f"{outcome.name}: {pass_fail(outcome.succeeded)}"
    return ReportLine(text=text, write_to_log=True, write_to_console=echo)


def format_benchmark_text(outcome: RunOutcome) -> str:
    metrics = outcome.metrics
    succeeded = "true" if outcome.succeeded else "false"
    return (
        f"{outcome.name}: {succeeded}, CC={metrics.cycles}, insts={metrics.instructions}, "
        f"AQ={metrics.queue_a}, BQ={metrics.queue_b}"
    )


def format_probe_text(outcome: RunOutcome) -> str:
    headline = f"{PROBE_LABEL}: {pass_fail(outcome.succeeded)}"
    if outcome.succeeded:
        return headline
    captured = outcome.stdout if outcome.stdout is not None else outcome.error_message or ""
    return f"{headline}\n{captured}"


def format_build_lines(succeeded: bool, stdout: str, *, echo: bool) -> tuple[ReportLine, ...]:
    """Build status line, plus the build output on failure (always shown on console)."""
    status = ReportLine(text=f"{BUILD_LABEL}: {pass_fail(succeeded)}", write_to_console=echo)
    if succeeded:
        return (status,)
    return status, ReportLine(text=stdout, write_to_log=True, write_to_console=True)
