"""Shared pytest fixtures for netbranch tests."""

from pathlib import Path
from typing import Optional

import pytest

from netbranch.config import NetBranchConfig
from netbranch.domain.errors import FetchError
from netbranch.domain.session import NetBranch
from netbranch.web.base import WebSession

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://nb.example.com/valley/"


def load_fixture(name: str) -> str:
    """Read an HTML fixture."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class FakeWebSession(WebSession):
    """WebSession that serves canned pages from a FakePortal."""

    def __init__(self, portal: "FakePortal"):
        super().__init__()
        self.portal = portal
        self.closed = False

    def _send(self, method, url, data=None):
        self.portal.requests.append((method, url, data))
        page = self.portal.routes.get((method, url))
        if page is None:
            raise FetchError(f"{method} {url} failed: 404 Not Found")
        return url, page

    def close(self):
        self.closed = True


class FakePortal:
    """Scripted NetBranch site keyed by (method, absolute URL)."""

    def __init__(self):
        self.requests: list[tuple[str, str, Optional[list]]] = []
        self.sessions: list[FakeWebSession] = []
        self.routes = {
            ("GET", BASE_URL): load_fixture("login.html"),
            ("POST", BASE_URL + "login.asp"): load_fixture("welcome.html"),
            ("GET", BASE_URL + "logout.asp"): load_fixture("logout.html"),
            ("GET", BASE_URL + "history.asp"): load_fixture("history_index.html"),
            ("GET", BASE_URL + "history_form.asp?acct=1001"): load_fixture("history_form.html"),
            ("GET", BASE_URL + "history_form.asp?acct=1002"): load_fixture("history_form.html"),
            ("POST", BASE_URL + "history_results.asp"): load_fixture("history.html"),
        }

    def serve(self, method: str, path: str, fixture: str) -> None:
        """Replace the page served for a route."""
        self.routes[(method, BASE_URL + path)] = load_fixture(fixture)

    def remove(self, method: str, path: str) -> None:
        """Make a route fail with 404."""
        del self.routes[(method, BASE_URL + path)]

    def web_factory(self, config: NetBranchConfig) -> FakeWebSession:
        session = FakeWebSession(self)
        self.sessions.append(session)
        return session

    def count(self, method: str, path: str) -> int:
        """Number of requests made to a route."""
        return sum(1 for m, url, _ in self.requests if m == method and url == BASE_URL + path)

    def last_form(self, path: str) -> dict[str, str]:
        """Form data of the most recent POST to a route."""
        for method, url, data in reversed(self.requests):
            if method == "POST" and url == BASE_URL + path:
                return dict(data)
        raise AssertionError(f"No POST to {path}")


@pytest.fixture
def portal():
    """Create a scripted portal serving the standard fixture pages."""
    return FakePortal()


@pytest.fixture
def client(portal):
    """Create a NetBranch client wired to the scripted portal."""
    return NetBranch(
        url=BASE_URL,
        account="12345",
        password="s3cret",
        web_factory=portal.web_factory,
    )


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR
