"""Log and console destinations for report lines."""

from __future__ import annotations

import sys
from typing import TextIO

from .report_models import ReportLine


class ReportSinks:
    """Writes report lines to the log file and, when asked, to the console.

    Only the single-threaded reporting phase writes here.
    """

    def __init__(
        self,
        log_file: TextIO | None,
        *,
        echo_to_console: bool = False,
        console: TextIO | None = None,
    ) -> None:
        self._log_file = log_file
        self._console = console
        self.echo_to_console = echo_to_console

    def emit(self, line: ReportLine) -> None:
        if line.write_to_log and self._log_file is not None:
            self._log_file.write(f"{line.text}\n")
            self._log_file.flush()
        if line.write_to_console:
            console = self._console or sys.stdout
            console.write(f"{line.text}\n")
            console.flush()

    def announce(self, text: str) -> None:
        """Print a progress banner to the console only."""
        self.emit(ReportLine(text=text, write_to_log=False, write_to_console=True))
