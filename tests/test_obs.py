"""Tests for the build service client."""

import pytest
import requests

from osutil.models import Credentials, MaintainedPackage
from osutil.obs import (
    AuthenticationError,
    BuildServiceError,
    OBSClient,
    maintainer_query,
    parse_package_collection,
)


COLLECTION = """<collection matches="3">
  <package project="devel:languages:rust" name="cargo-c"/>
  <package project="Base:System" name="xdg-utils"/>
  <package project="openSUSE:Factory" name="cargo-c"/>
</collection>
"""


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def make_client(session):
    return OBSClient(
        Credentials("geeko", "secret"),
        api_url="https://api.example.org/",
        session=session,
    )


def test_parse_package_collection():
    packages = parse_package_collection(COLLECTION)

    assert packages == [
        MaintainedPackage("devel:languages:rust", "cargo-c"),
        MaintainedPackage("Base:System", "xdg-utils"),
        MaintainedPackage("openSUSE:Factory", "cargo-c"),
    ]


def test_parse_empty_collection():
    assert parse_package_collection('<collection matches="0"/>') == []


def test_parse_invalid_xml():
    with pytest.raises(BuildServiceError):
        parse_package_collection("<collection>")


def test_parse_unexpected_root():
    with pytest.raises(BuildServiceError):
        parse_package_collection('<status code="error"/>')


def test_maintainer_query():
    assert maintainer_query("geeko") == (
        "person/@userid='geeko' and person/@role='maintainer'"
    )


def test_get_maintained_packages_sends_authenticated_search():
    session = FakeSession(FakeResponse(text=COLLECTION))
    client = make_client(session)

    packages = client.get_maintained_packages()

    assert len(packages) == 3
    url, kwargs = session.calls[0]
    assert url == "https://api.example.org/search/package/id"
    assert kwargs["params"] == {"match": maintainer_query("geeko")}
    assert kwargs["auth"].username == "geeko"
    assert kwargs["auth"].password == "secret"


def test_maintained_package_names_are_unique_and_ordered():
    client = make_client(FakeSession(FakeResponse(text=COLLECTION)))

    assert client.maintained_package_names() == ["cargo-c", "xdg-utils"]


def test_unauthorized_raises_authentication_error():
    client = make_client(FakeSession(FakeResponse(status_code=401)))

    with pytest.raises(AuthenticationError) as excinfo:
        client.get_maintained_packages()

    assert "geeko" in str(excinfo.value)


def test_server_error_raises_build_service_error():
    client = make_client(FakeSession(FakeResponse(status_code=500)))

    with pytest.raises(BuildServiceError):
        client.get_maintained_packages()


def test_connection_error_raises_build_service_error():
    client = make_client(FakeSession(exc=requests.ConnectionError("refused")))

    with pytest.raises(BuildServiceError) as excinfo:
        client.get_maintained_packages()

    assert not isinstance(excinfo.value, AuthenticationError)


@pytest.mark.parametrize("username", ["o'brien", 'a"b'])
def test_quote_in_username_is_rejected(username):
    with pytest.raises(BuildServiceError) as excinfo:
        maintainer_query(username)

    assert "quotes" in str(excinfo.value)


def test_quote_in_username_fails_before_request():
    session = FakeSession(FakeResponse(text=COLLECTION))
    client = OBSClient(Credentials("o'brien", "secret"), session=session)

    with pytest.raises(BuildServiceError):
        client.get_maintained_packages()

    assert session.calls == []
