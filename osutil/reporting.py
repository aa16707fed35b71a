"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence, TextIO

import pandas as pd

from .models import STATUS_NOT_FOUND, PackageReport


logger = logging.getLogger(__name__)

CSV_COLUMNS = ["name", "status", "current_version", "newest_version", "error"]


def format_report(report: PackageReport) -> str:
    if report.is_outdated:
        return f"{report.name}: {report.current_version} -> {report.newest_version}"
    if report.status == STATUS_NOT_FOUND:
        return f"Could not find package {report.name}"
    raise ValueError(f"no text line for {report.status} report of {report.name}")


def report_lines(
    reports: Iterable[PackageReport],
    show_packages_not_found: bool = False,
) -> List[str]:
    """Render outdated packages, and optionally unknown ones, as text lines."""
    lines = []
    for report in reports:
        if report.is_outdated:
            lines.append(format_report(report))
        elif report.status == STATUS_NOT_FOUND and show_packages_not_found:
            lines.append(format_report(report))
    return lines


def print_reports(
    reports: Sequence[PackageReport],
    stream: TextIO,
    show_packages_not_found: bool = False,
) -> None:
    for line in report_lines(reports, show_packages_not_found):
        print(line, file=stream)

    outdated = sum(1 for report in reports if report.is_outdated)
    logger.info("%d of %d packages outdated", outdated, len(reports))


def print_reports_json(
    reports: Sequence[PackageReport],
    stream: TextIO,
    show_packages_not_found: bool = False,
) -> None:
    """Print reports as a JSON array, dropping not-found ones unless asked."""
    rows = [
        report.to_dict()
        for report in reports
        if show_packages_not_found or report.status != STATUS_NOT_FOUND
    ]
    json.dump(rows, stream, indent=2)
    stream.write("\n")


def export_reports_csv(reports: Iterable[PackageReport], csv_file: Path) -> Path:
    csv_file = Path(csv_file)
    csv_file.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([report.to_dict() for report in reports], columns=CSV_COLUMNS)
    df.to_csv(csv_file, index=False)
    return csv_file
