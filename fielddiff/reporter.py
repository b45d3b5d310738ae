"""Terminal rendering of diff reports."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import DiffReport, FieldState
from .utils import truncate

# Field names longer than this are cut to FIELD_NAME_TRUNCATE_LENGTH + "..."
FIELD_NAME_MAX_LENGTH = 37
FIELD_NAME_TRUNCATE_LENGTH = 34
VALUE_MAX_LENGTH = 17
VALUE_TRUNCATE_LENGTH = 14

STATE_STYLES = {
    FieldState.COMMON_SAME: "green",
    FieldState.COMMON_DIFFERENT: "yellow",
    FieldState.ONLY_IN_FIRST: "yellow",
    FieldState.ONLY_IN_SECOND: "yellow",
}


class ComparisonReporter:
    """
    Prints a DiffReport as rich tables.

    Usage:
        reporter = ComparisonReporter()
        reporter.print_report(report, "a.json", "b.json")
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_report(self, report: DiffReport, first_path: str, second_path: str):
        self.print_file_paths(first_path, second_path)
        self.print_detailed_table(report)
        self.print_summary_table(report)

    def print_file_paths(self, first_path: str, second_path: str):
        self.console.print("\n[bold]FILE PATHS:[/bold]")
        self.console.print(f"File 1: {first_path}", markup=False)
        self.console.print(f"File 2: {second_path}", markup=False)

    def print_detailed_table(self, report: DiffReport):
        table = Table(title="DETAILED FIELD COMPARISON TABLE")
        table.add_column("Field Name", no_wrap=True)
        table.add_column(Text(f"File 1 ({report.first_name})"))
        table.add_column(Text(f"File 2 ({report.second_name})"))
        table.add_column("Value in File 1")
        table.add_column("Value in File 2")
        table.add_column("Status")
        table.add_column("Difference")

        for entry in report.entries:
            value1 = truncate(entry.value_first, VALUE_MAX_LENGTH, VALUE_TRUNCATE_LENGTH)
            value2 = truncate(entry.value_second, VALUE_MAX_LENGTH, VALUE_TRUNCATE_LENGTH)
            # Text cells: rendered JSON like [true] must not be read as markup
            table.add_row(
                Text(truncate(entry.path, FIELD_NAME_MAX_LENGTH, FIELD_NAME_TRUNCATE_LENGTH)),
                "Yes" if entry.in_first else "No",
                "Yes" if entry.in_second else "No",
                Text(value1 if value1 is not None else "-"),
                Text(value2 if value2 is not None else "-"),
                entry.status,
                entry.difference,
                style=STATE_STYLES[entry.state]
            )

        self.console.print(table)

    def print_summary_table(self, report: DiffReport):
        table = Table(title="SUMMARY")
        table.add_column("Metric")
        table.add_column("File 1")
        table.add_column("File 2")
        table.add_column("Difference")

        total1, total2 = report.total_first, report.total_second
        table.add_row(
            "Total fields",
            str(total1),
            str(total2),
            "Same" if total1 == total2 else str(abs(total1 - total2))
        )
        table.add_row(
            "Common fields",
            str(report.common_fields),
            str(report.common_fields),
            "0"
        )
        table.add_row(
            "Different values",
            str(report.different_values),
            str(report.different_values),
            "N/A"
        )
        table.add_row(
            "Unique fields",
            str(report.only_in_first),
            str(report.only_in_second),
            "N/A"
        )

        self.console.print(table)
