"""NetBranch session gateway."""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional

from netbranch.config import NetBranchConfig, load_config
from netbranch.domain.balances import extract_accounts, parse_welcome
from netbranch.domain.entities import Account, Transaction, WelcomeBanner
from netbranch.domain.errors import (
    AuthenticationError,
    NavigationError,
    WebSessionError,
    link_not_found,
    login_failed,
)
from netbranch.domain.history import fetch_transactions
from netbranch.utils.date_parser import to_date
from netbranch.web.base import WebSession
from netbranch.web.factories import create_web_session

logger = logging.getLogger(__name__)

LOGIN_FORM = "frmLogin"
LOGIN_BUTTON = "Login"
USERNAME_FIELD = "USERNAME"
PASSWORD_FIELD = "PASSWORD"
LOGOUT_LINK = r"Logout"

WebFactory = Callable[[NetBranchConfig], WebSession]


class NetBranch:
    """Client for one NetBranch online banking login.

    Every public fetch logs in if needed and logs out when done, so no
    authenticated session outlives a call. Not safe to share between
    threads; use one instance per thread.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        account: Optional[str] = None,
        password: Optional[str] = None,
        web_factory: Optional[WebFactory] = None,
        config: Optional[NetBranchConfig] = None,
    ):
        """Initialize the client. Does not connect to the server.

        Args:
            url: Portal URL, e.g. https://nbp1.cunetbranch.com/valley/
            account: Login identifier
            password: Login password
            web_factory: Callable building a WebSession from the config
            config: Complete settings, used instead of url/account/password

        Raises:
            InvalidArgument: If url, account or password is missing
        """
        if config is None:
            config = NetBranchConfig(url=url, account=account, password=password)
        self.config = config
        self.web_factory = web_factory or create_web_session
        self.web: Optional[WebSession] = None
        self.logged_in = False
        self.welcome: Optional[WelcomeBanner] = None
        self._accounts: Optional[list[Account]] = None

    @classmethod
    def from_config(cls, config: NetBranchConfig, web_factory: Optional[WebFactory] = None) -> "NetBranch":
        """Create a client from a NetBranchConfig."""
        return cls(config=config, web_factory=web_factory)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, web_factory: Optional[WebFactory] = None
    ) -> "NetBranch":
        """Create a client from NETBRANCH_* environment variables."""
        return cls(config=load_config(environ), web_factory=web_factory)

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def account(self) -> str:
        return self.config.account

    def login(self) -> str:
        """Log in and return the content of the welcome page.

        Raises:
            AuthenticationError: If the login page cannot be fetched, the
                form cannot be submitted, or the result is not the
                welcome page
        """
        self._discard_web()
        web = self.web_factory(self.config)
        self.web = web
        logger.debug("logging in to %s as %s", self.url, self.account)

        try:
            web.get(self.url)
            content = web.submit_form(
                {USERNAME_FIELD: self.account, PASSWORD_FIELD: self.config.password},
                form_name=LOGIN_FORM,
                button=LOGIN_BUTTON,
            )
        except WebSessionError as e:
            self._discard_web()
            raise AuthenticationError(login_failed(self.account, str(e))) from e

        welcome = parse_welcome(content)
        if welcome is None:
            self._discard_web()
            raise AuthenticationError(login_failed(self.account, "welcome page not shown"))

        self.welcome = welcome
        self.logged_in = True
        return content

    def logout(self) -> None:
        """Follow the Logout link and drop the web session.

        Raises:
            NavigationError: If there is no Logout link
        """
        if self.web is None:
            raise NavigationError(link_not_found(LOGOUT_LINK))
        try:
            self.web.follow_link(LOGOUT_LINK)
        except WebSessionError as e:
            raise NavigationError(str(e)) from e
        finally:
            self._discard_web()
        logger.debug("logged out of %s", self.url)

    def accounts(self) -> list[Account]:
        """Return cached accounts, fetching them on first use."""
        if self._accounts is None:
            return self.refresh()
        return self._accounts

    def refresh(self) -> list[Account]:
        """Fetch balances again and replace the cached accounts.

        Returns:
            List of accounts in page order
        """
        with self._visit() as content:
            accounts = extract_accounts(content, session=self)
        self._accounts = accounts
        return accounts

    def transactions(self, account: Account, start: Any, end: Any) -> list[Transaction]:
        """Fetch transactions for an account between two dates, oldest first.

        Args:
            account: Account from this client's accounts()
            start: First day, as a date, datetime, timestamp or date string
            end: Last day, in any of the same forms

        Raises:
            InvalidArgument: If a bound is missing or not a date; raised
                before any request is made
            NavigationError: If the history pages cannot be reached
        """
        start_date = to_date(start, "from")
        end_date = to_date(end, "to")

        with self._visit():
            try:
                transactions = fetch_transactions(self.web, account, start_date, end_date)
            except WebSessionError as e:
                raise NavigationError(str(e)) from e
        return transactions

    @contextmanager
    def _visit(self) -> Iterator[str]:
        """Log in if needed, yield the current page, then log out.

        On failure the web session is dropped so the next call starts
        logged out.
        """
        content = self.login() if not self.logged_in else self.web.content
        try:
            yield content
        except BaseException:
            self._discard_web()
            raise
        self.logout()

    def _discard_web(self) -> None:
        if self.web is not None:
            self.web.close()
        self.web = None
        self.logged_in = False
