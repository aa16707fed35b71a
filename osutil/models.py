"""
Core data models for osutil.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


STATUS_OUTDATED = "outdated"
STATUS_CURRENT = "current"
STATUS_NOT_FOUND = "not_found"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class Credentials:
    """Build service credentials read from the config file."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class MaintainedPackage:
    """A package the user maintains in a build service project."""

    project: str
    name: str


@dataclass(frozen=True)
class RepologyEntry:
    """A single repository entry of a Repology project."""

    repo: str
    visiblename: str
    version: str
    status: str
    subrepo: Optional[str] = None
    srcname: Optional[str] = None
    maintainers: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()
    origversion: Optional[str] = None


@dataclass(frozen=True)
class PackageReport:
    """Outcome of checking one maintained package."""

    name: str
    status: str
    current_version: Optional[str] = None
    newest_version: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_outdated(self) -> bool:
        return self.status == STATUS_OUTDATED

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status,
            "current_version": self.current_version,
            "newest_version": self.newest_version,
            "error": self.error,
        }
