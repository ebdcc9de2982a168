"""Tests for WebSession link and form handling."""

import pytest

from netbranch.domain.errors import FetchError, FormNotFoundError, LinkNotFoundError
from conftest import BASE_URL, FakeWebSession


@pytest.fixture
def web(portal):
    """Create a web session on the scripted portal."""
    return FakeWebSession(portal)


def test_get_sets_current_page(web):
    """Test get records the URL and content."""
    content = web.get(BASE_URL)

    assert web.url == BASE_URL
    assert web.content == content
    assert 'name="frmLogin"' in content


def test_get_failure(web):
    """Test transport failures surface as FetchError."""
    with pytest.raises(FetchError):
        web.get(BASE_URL + "missing.asp")


def test_follow_link_resolves_relative_url(web, portal):
    """Test links are matched on visible text and resolved against the page."""
    web.get(BASE_URL)
    web.submit_form({"USERNAME": "u", "PASSWORD": "p"}, form_name="frmLogin", button="Login")
    web.follow_link(r"Account History")

    assert web.url == BASE_URL + "history.asp"
    assert ("GET", BASE_URL + "history.asp", None) in portal.requests


def test_follow_link_regex(web):
    """Test text_regex is searched, not anchored."""
    web.portal.routes[("GET", BASE_URL + "page.asp")] = (
        '<a href="history_form.asp?acct=1002">Savings (1002)</a>'
    )
    web.get(BASE_URL + "page.asp")
    web.follow_link(r"\(1002\)")

    assert web.url == BASE_URL + "history_form.asp?acct=1002"


def test_follow_link_on_xml_declared_page(web):
    """Test links are found on XHTML pages with an encoding declaration."""
    web.portal.routes[("GET", BASE_URL + "page.asp")] = (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml"><body>'
        '<a href="logout.asp">Logout</a></body></html>'
    )
    web.get(BASE_URL + "page.asp")
    web.follow_link(r"Logout")

    assert web.url == BASE_URL + "logout.asp"


def test_follow_link_missing(web):
    """Test a missing link raises LinkNotFoundError."""
    web.get(BASE_URL)
    with pytest.raises(LinkNotFoundError):
        web.follow_link(r"Logout")


def test_follow_link_without_page(web):
    """Test following a link before any page is loaded."""
    with pytest.raises(FetchError):
        web.follow_link(r"Logout")


class TestSubmitForm:
    """Tests for submit_form."""

    def test_named_form_with_button(self, web, portal):
        """Test fields, hidden inputs and the pressed button are posted."""
        web.get(BASE_URL)
        web.submit_form({"USERNAME": "12345", "PASSWORD": "pw"}, form_name="frmLogin", button="Login")

        assert portal.last_form("login.asp") == {
            "USERNAME": "12345",
            "PASSWORD": "pw",
            "SESSIONTOKEN": "abc123",
            "Login": "Login",
        }
        assert web.url == BASE_URL + "login.asp"

    def test_form_selected_by_fields(self, web, portal):
        """Test select values outside the option list are still sent."""
        web.get(BASE_URL + "history_form.asp?acct=1001")
        web.submit_form({"FM": "01", "FD": "5", "FY": "2024", "TM": "01", "TD": "31", "TY": "2024"})

        data = portal.last_form("history_results.asp")
        assert data["FD"] == "5"
        assert data["TD"] == "31"
        assert data["FY"] == "2024"
        assert data["ACCT"] == "1001"
        assert "btnSubmit" not in data

    def test_get_form(self, web, portal):
        """Test GET forms encode fields into the query string."""
        portal.routes[("GET", BASE_URL + "search.asp")] = (
            '<form action="find.asp" method="get"><input name="q" value="old"></form>'
        )
        portal.routes[("GET", BASE_URL + "find.asp?q=new+value")] = "<p>found</p>"
        web.get(BASE_URL + "search.asp")

        assert web.submit_form({"q": "new value"}) == "<p>found</p>"

    def test_missing_form(self, web):
        """Test an unknown form name raises FormNotFoundError."""
        web.get(BASE_URL)
        with pytest.raises(FormNotFoundError, match="frmOther"):
            web.submit_form({"USERNAME": "u"}, form_name="frmOther")

    def test_missing_field(self, web):
        """Test a field the form lacks raises FormNotFoundError."""
        web.get(BASE_URL)
        with pytest.raises(FormNotFoundError, match="PIN"):
            web.submit_form({"PIN": "1"}, form_name="frmLogin")

    def test_missing_button(self, web):
        """Test an unknown button label raises FormNotFoundError."""
        web.get(BASE_URL)
        with pytest.raises(FormNotFoundError, match="Sign On"):
            web.submit_form({"USERNAME": "u"}, form_name="frmLogin", button="Sign On")

    def test_no_form_with_fields(self, web):
        """Test field-based selection when no form matches."""
        web.get(BASE_URL)
        with pytest.raises(FormNotFoundError):
            web.submit_form({"FM": "01"})
