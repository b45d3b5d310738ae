"""CSV export of diff reports."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import IO

from .models import DiffReport
from .exceptions import ReportExportError

logger = logging.getLogger(__name__)


def csv_header(report: DiffReport) -> list[str]:
    return [
        "Field Name",
        f"File 1 ({report.first_name})",
        f"File 2 ({report.second_name})",
        "Value in File 1",
        "Value in File 2",
        "Status",
        "Difference",
    ]


def write_report_csv(report: DiffReport, stream: IO[str]):
    """
    Write a report as CSV to an open text stream.

    One row per field path; presence columns are ``Yes``/``No`` and a value
    absent from a document is an empty cell.
    """
    writer = csv.writer(stream, delimiter=',', lineterminator='\r\n')
    writer.writerow(csv_header(report))
    for entry in report.entries:
        writer.writerow([
            entry.path,
            "Yes" if entry.in_first else "No",
            "Yes" if entry.in_second else "No",
            entry.value_first,
            entry.value_second,
            entry.status,
            entry.difference,
        ])


def export_report_to_csv(report: DiffReport, destination: str | Path):
    """
    Export a report to a CSV file.

    Raises:
        ReportExportError: If the file cannot be written
    """
    try:
        with open(destination, 'w', encoding='utf-8', newline='') as f:
            write_report_csv(report, f)
    except OSError as e:
        raise ReportExportError(str(destination), e.strerror or str(e)) from e

    logger.info(f"✓ Comparison report exported to CSV: {destination}")
