"""Results reporting domain exports."""

from .report_lines import format_build_lines, format_outcome
from .report_models import ReportLine, RunMetadata, SuiteCategory, SuiteReport, TerminationPolicy
from .report_sinks import ReportSinks
from .results_workbook_writer import write_results_workbook
from .suite_reporter import EXIT_FAILURE, EXIT_OK, outcomes_to_report, report

__all__ = [
    "ReportLine",
    "RunMetadata",
    "SuiteCategory",
    "SuiteReport",
    "TerminationPolicy",
    "ReportSinks",
    "EXIT_OK",
    "EXIT_FAILURE",
    "format_build_lines",
    "format_outcome",
    "outcomes_to_report",
    "report",
    "write_results_workbook",
]
