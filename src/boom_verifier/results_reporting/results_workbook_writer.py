"""Results workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from boom_verifier.simulator_execution.execution_outcomes import RunOutcome

from .report_lines import pass_fail
from .report_models import RunMetadata, SuiteReport

RUN_INFO_SHEET_NAME = "RunInfo"
RESULT_COLUMNS: tuple[str, ...] = ("Name", "Status", "CC", "insts", "AQ", "BQ", "Error")


@dataclass(frozen=True)
class _RunCounts:
    """Computed run-level counters for the RunInfo sheet."""

    total: int
    passed: int
    failed: int


def write_results_workbook(
    output_path: Path | str,
    suites: Sequence[SuiteReport],
    run_metadata: RunMetadata,
) -> Path:
    """Write one sheet per reported suite plus a RunInfo summary sheet."""
    workbook = Workbook()
    default_sheet = workbook.active
    if default_sheet is not None:
        workbook.remove(default_sheet)

    for suite in suites:
        _write_suite_sheet(workbook, suite)
    _write_run_info_sheet(workbook, run_metadata, suites)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_suite_sheet(workbook: Workbook, suite: SuiteReport) -> None:
    sheet = workbook.create_sheet(suite.category.value)
    for column_index, name in enumerate(RESULT_COLUMNS, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.cell(row=1, column=column_index).style = "Headline 1"
    for row, outcome in enumerate(suite.outcomes, start=2):
        _write_outcome_row(sheet, row, outcome)
    _fit_column_widths(sheet, suite.outcomes)


def _write_outcome_row(sheet: Worksheet, row: int, outcome: RunOutcome) -> None:
    metrics = outcome.metrics
    values = (
        outcome.name,
        pass_fail(outcome.succeeded),
        metrics.cycles,
        metrics.instructions,
        metrics.queue_a,
        metrics.queue_b,
        outcome.error_message,
    )
    for column, value in enumerate(values, start=1):
        sheet.cell(row=row, column=column, value=value)


def _fit_column_widths(sheet: Worksheet, outcomes: Sequence[RunOutcome]) -> None:
    longest_name = max((len(outcome.name) for outcome in outcomes), default=0)
    sheet.column_dimensions[get_column_letter(1)].width = max(12, min(longest_name + 4, 60))
    for column_index in range(2, len(RESULT_COLUMNS)):
        sheet.column_dimensions[get_column_letter(column_index)].width = 14
    sheet.column_dimensions[get_column_letter(len(RESULT_COLUMNS))].width = 50


def _write_run_info_sheet(
    workbook: Workbook,
    run_metadata: RunMetadata,
    suites: Sequence[SuiteReport],
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = _calculate_run_counts(suites)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("simulator", str(run_metadata.simulator_path)),
        ("log_path", str(run_metadata.log_path) if run_metadata.log_path else ""),
        ("policy", run_metadata.policy.value),
        ("exit_code", run_metadata.exit_code),
        ("total", counts.total),
        ("passed", counts.passed),
        ("failed", counts.failed),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)


def _calculate_run_counts(suites: Sequence[SuiteReport]) -> _RunCounts:
    outcomes = [outcome for suite in suites for outcome in suite.outcomes]
    passed = sum(1 for outcome in outcomes if outcome.succeeded)
    return _RunCounts(total=len(outcomes), passed=passed, failed=len(outcomes) - passed)
