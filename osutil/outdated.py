"""
Outdated package detection against Repology data.
"""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from tqdm import tqdm

from .interfaces import PackageTracker
from .models import (
    STATUS_CURRENT,
    STATUS_ERROR,
    STATUS_NOT_FOUND,
    STATUS_OUTDATED,
    PackageReport,
    RepologyEntry,
)
from .repology import RepologyError


logger = logging.getLogger(__name__)

DEFAULT_REPO = "opensuse_tumbleweed"
UNKNOWN_VERSION = "?"


def newest_version(entries: Iterable[RepologyEntry]) -> str:
    """Return the version of the first entry marked newest, or ``?``."""
    for entry in entries:
        if entry.status == "newest":
            return entry.version
    return UNKNOWN_VERSION


def classify(name: str, entries: Sequence[RepologyEntry], repo: str = DEFAULT_REPO) -> PackageReport:
    """Classify a package from its Repology entries.

    Args:
        name: Package name
        entries: Repology entries for the project
        repo: Repology repository the package is shipped in

    Returns:
        Report with status outdated, current or not_found
    """
    target = next((entry for entry in entries if entry.repo == repo), None)
    if target is None:
        return PackageReport(name=name, status=STATUS_NOT_FOUND)

    if target.status == STATUS_OUTDATED:
        return PackageReport(
            name=name,
            status=STATUS_OUTDATED,
            current_version=target.version,
            newest_version=newest_version(entries),
        )
    return PackageReport(
        name=name,
        status=STATUS_CURRENT,
        current_version=target.version,
    )


class OutdatedChecker:
    """Check maintained packages against a package tracker."""

    def __init__(
        self,
        tracker: PackageTracker,
        repo: str = DEFAULT_REPO,
        jobs: int = 1,
        progress: Optional[bool] = None,
    ) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        self.tracker = tracker
        self.repo = repo
        self.jobs = jobs
        # Show a progress bar only on an interactive terminal by default.
        self.progress = sys.stderr.isatty() if progress is None else progress

    def check_package(self, name: str) -> PackageReport:
        """Check one package; tracker failures become error reports."""
        try:
            entries = self.tracker.get_project(name)
        except RepologyError as exc:
            logger.error("%s", exc)
            return PackageReport(name=name, status=STATUS_ERROR, error=str(exc))
        return classify(name, entries, self.repo)

    def check_packages(self, names: Sequence[str]) -> List[PackageReport]:
        """Check all packages, returning reports in input order."""
        with tqdm(
            total=len(names),
            unit="pkg",
            disable=not self.progress,
            file=sys.stderr,
        ) as pbar:
            if self.jobs == 1:
                reports = []
                for name in names:
                    reports.append(self.check_package(name))
                    pbar.update(1)
                return reports

            def run(name: str) -> PackageReport:
                report = self.check_package(name)
                pbar.update(1)
                return report

            with ThreadPoolExecutor(max_workers=self.jobs) as executor:
                return list(executor.map(run, names))
