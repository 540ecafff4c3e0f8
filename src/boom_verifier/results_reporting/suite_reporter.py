"""Ordered reporting of suite outcomes under a termination policy."""

from __future__ import annotations

from collections.abc import Sequence

from boom_verifier.simulator_execution.execution_outcomes import RunOutcome

from .report_lines import format_outcome
from .report_models import SuiteCategory, TerminationPolicy
from .report_sinks import ReportSinks

EXIT_OK = 0
EXIT_FAILURE = 1


def outcomes_to_report(
    outcomes: Sequence[RunOutcome], policy: TerminationPolicy
) -> tuple[RunOutcome, ...]:
    """Return the prefix of `outcomes` the reporter emits under `policy`."""
    if policy is TerminationPolicy.RUN_TO_COMPLETION:
        return tuple(outcomes)
    reported: list[RunOutcome] = []
    for outcome in outcomes:
        reported.append(outcome)
        if not outcome.succeeded:
            break
    return tuple(reported)


def report(
    outcomes: Sequence[RunOutcome],
    policy: TerminationPolicy,
    sinks: ReportSinks,
    category: SuiteCategory,
) -> int:
    """Write one report line per outcome in discovery order and return an exit code.

    With TERMINATE_ON_FIRST_FAILURE, reporting stops right after the first
    failed outcome's line and the exit code is non-zero. Run-to-completion
    always reports every outcome and returns zero.
    """
    for outcome in outcomes:
        sinks.emit(format_outcome(outcome, category, echo=sinks.echo_to_console))
        if policy is TerminationPolicy.TERMINATE_ON_FIRST_FAILURE and not outcome.succeeded:
            return EXIT_FAILURE
    return EXIT_OK
