"""
Interfaces for the build service and the package tracker.
"""

from __future__ import annotations

from typing import List, Protocol

from .models import MaintainedPackage, RepologyEntry


class BuildService(Protocol):
    """List the packages a user maintains."""

    def get_maintained_packages(self, username: str) -> List[MaintainedPackage]:
        ...

    def maintained_package_names(self, username: str) -> List[str]:
        ...


class PackageTracker(Protocol):
    """Provide cross-distribution version data for a project."""

    def get_project(self, name: str) -> List[RepologyEntry]:
        ...
