"""
Repology API client.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from . import __version__
from .interfaces import PackageTracker
from .models import RepologyEntry


logger = logging.getLogger(__name__)

DEFAULT_REPOLOGY_URL = "https://repology.org/api/v1"
USER_AGENT = f"osutil/{__version__} (python-requests)"


class RepologyError(Exception):
    """Fetching or decoding Repology data failed."""

    def __init__(self, message: str, package: str = "") -> None:
        super().__init__(message)
        self.package = package


def _as_tuple(value) -> tuple:
    if not value:
        return ()
    return tuple(str(item) for item in value)


def parse_entry(data: Dict) -> RepologyEntry:
    """Build an entry from one element of the project response."""
    return RepologyEntry(
        repo=data["repo"],
        visiblename=data["visiblename"],
        version=data["version"],
        status=data["status"],
        subrepo=data.get("subrepo"),
        srcname=data.get("srcname"),
        maintainers=_as_tuple(data.get("maintainers")),
        categories=_as_tuple(data.get("categories")),
        origversion=data.get("origversion"),
    )


class RepologyClient(PackageTracker):
    """Fetch per-repository versions of a project."""

    def __init__(
        self,
        base_url: str = DEFAULT_REPOLOGY_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT
        self.timeout = timeout

    def get_project(self, name: str) -> List[RepologyEntry]:
        """Return all repository entries of a project.

        An empty list means Repology does not know the project.
        """
        url = f"{self.base_url}/project/{quote(name, safe='')}"
        logger.debug("GET %s", url)
        try:
            with self.session.get(url, timeout=self.timeout) as response:
                response.raise_for_status()
                data = response.json()
        except requests.JSONDecodeError as exc:
            raise RepologyError(
                f"unable to deserialize json for package {name}: {exc}",
                package=name,
            ) from exc
        except requests.RequestException as exc:
            raise RepologyError(
                f"unable to get project information from repology for package {name}: {exc}",
                package=name,
            ) from exc
        except ValueError as exc:
            raise RepologyError(
                f"unable to deserialize json for package {name}: {exc}",
                package=name,
            ) from exc

        if not isinstance(data, list):
            raise RepologyError(
                f"unexpected repology response for package {name}: expected a list",
                package=name,
            )
        try:
            return [parse_entry(item) for item in data]
        except (KeyError, TypeError) as exc:
            raise RepologyError(
                f"malformed repology entry for package {name}: {exc!r}",
                package=name,
            ) from exc
