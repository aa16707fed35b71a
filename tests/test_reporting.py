import io
import json
from pathlib import Path

import pandas as pd
import pytest

from osutil.models import PackageReport
from osutil.reporting import (
    export_reports_csv,
    format_report,
    print_reports,
    print_reports_json,
    report_lines,
)


REPORTS = [
    PackageReport("cargo-c", "outdated", current_version="0.9.29", newest_version="0.10.1"),
    PackageReport("xdg-utils", "current", current_version="1.2.1"),
    PackageReport("obscure", "not_found"),
    PackageReport("broken", "error", error="unable to deserialize json for package broken"),
]


def test_report_lines_default():
    assert report_lines(REPORTS) == ["cargo-c: 0.9.29 -> 0.10.1"]


def test_report_lines_with_not_found():
    assert report_lines(REPORTS, show_packages_not_found=True) == [
        "cargo-c: 0.9.29 -> 0.10.1",
        "Could not find package obscure",
    ]


def test_print_reports():
    stream = io.StringIO()
    print_reports(REPORTS, stream)
    assert stream.getvalue() == "cargo-c: 0.9.29 -> 0.10.1\n"


def test_print_reports_json():
    stream = io.StringIO()
    print_reports_json(REPORTS, stream)

    rows = json.loads(stream.getvalue())
    assert [row["name"] for row in rows] == ["cargo-c", "xdg-utils", "broken"]
    assert rows[0]["newest_version"] == "0.10.1"


def test_export_reports_csv(tmp_path: Path):
    csv_file = export_reports_csv(REPORTS, tmp_path / "out" / "report.csv")

    assert csv_file.exists()
    df = pd.read_csv(csv_file)
    assert list(df.columns) == ["name", "status", "current_version", "newest_version", "error"]
    assert list(df["status"]) == ["outdated", "current", "not_found", "error"]


def test_format_report_rejects_reports_without_text_line():
    with pytest.raises(ValueError):
        format_report(PackageReport("xdg-utils", "current", current_version="1.2.1"))
