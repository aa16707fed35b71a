"""
Open Build Service client.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

import requests
from requests.auth import HTTPBasicAuth

from .interfaces import BuildService
from .models import Credentials, MaintainedPackage


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.opensuse.org"


class BuildServiceError(Exception):
    """The build service request failed or returned unusable data."""


class AuthenticationError(BuildServiceError):
    """The build service rejected the configured credentials."""


def maintainer_query(username: str) -> str:
    """Build the XPath match expression for packages maintained by a user."""
    if "'" in username or "\"" in username:
        raise BuildServiceError(f"invalid username {username!r}: quotes are not allowed")
    return f"person/@userid='{username}' and person/@role='maintainer'"


def parse_package_collection(text: str) -> List[MaintainedPackage]:
    """Parse a ``<collection>`` search result into packages.

    Args:
        text: XML body returned by the search API

    Returns:
        Packages in document order
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise BuildServiceError(f"unable to parse search result: {exc}") from exc

    if root.tag != "collection":
        raise BuildServiceError(f"unexpected search result root element <{root.tag}>")

    packages = []
    for element in root.findall("package"):
        name = element.get("name")
        project = element.get("project")
        if not name or not project:
            logger.warning("Skipping incomplete package entry: %s", element.attrib)
            continue
        packages.append(MaintainedPackage(project=project, name=name))

    matches = root.get("matches")
    if matches is not None and matches.isdigit() and int(matches) != len(packages):
        logger.debug("Search reported %s matches, parsed %d", matches, len(packages))
    return packages


class OBSClient(BuildService):
    """Query the build service search API with basic authentication."""

    def __init__(
        self,
        credentials: Credentials,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self.credentials = credentials
        self.api_url = api_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def get_maintained_packages(self, username: Optional[str] = None) -> List[MaintainedPackage]:
        """Return the packages where ``username`` has the maintainer role.

        Defaults to the user of the configured credentials.
        """
        username = username or self.credentials.username
        url = f"{self.api_url}/search/package/id"
        logger.info("Fetching packages maintained by %s", username)

        try:
            response = self.session.get(
                url,
                params={"match": maintainer_query(username)},
                auth=HTTPBasicAuth(self.credentials.username, self.credentials.password),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise BuildServiceError(f"unable to get maintained packages: {exc}") from exc

        if response.status_code == 401:
            raise AuthenticationError(
                f"authentication as {self.credentials.username} rejected by {self.api_url}"
            )
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise BuildServiceError(f"unable to get maintained packages: {exc}") from exc

        packages = parse_package_collection(response.text)
        logger.info("Found %d maintained packages", len(packages))
        return packages

    def maintained_package_names(self, username: Optional[str] = None) -> List[str]:
        """Return unique package names, keeping first-seen order."""
        seen = set()
        names = []
        for package in self.get_maintained_packages(username):
            if package.name not in seen:
                seen.add(package.name)
                names.append(package.name)
        return names
