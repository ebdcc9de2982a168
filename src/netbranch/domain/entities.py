"""Record types for data scraped from a NetBranch portal.

These are plain frozen data classes. Back-references to the owning session
or account are carried for navigation only and take no part in equality or
repr.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from netbranch.domain.errors import InvalidArgument, account_detached

if TYPE_CHECKING:
    from netbranch.domain.session import NetBranch


@dataclass(frozen=True)
class WelcomeBanner:
    """Member details shown on the page right after login."""

    user: str
    member_no: str
    private: str


@dataclass(frozen=True)
class Account:
    """Account row from the balances page."""

    name: str
    account_no: str
    balance: Decimal
    available: Decimal
    session: Optional["NetBranch"] = field(default=None, compare=False, repr=False)
    history: list["Transaction"] = field(default_factory=list, compare=False, repr=False)

    @property
    def sort_code(self) -> str:
        """The portal has no sort code, so this is the account name."""
        return self.name

    def transactions(self, start: Any, end: Any) -> list["Transaction"]:
        """Fetch transactions between start and end, oldest first.

        Both bounds may be dates, datetimes, timestamps or date strings.
        The result is also kept in ``history``.

        Raises:
            InvalidArgument: If either bound is missing or the account has
                no session
            NavigationError: If the history pages cannot be reached
        """
        if self.session is None:
            raise InvalidArgument(account_detached(self.account_no))

        fetched = self.session.transactions(self, start, end)
        self.history[:] = fetched
        return fetched


@dataclass(frozen=True)
class Transaction:
    """Transaction row from an account history page."""

    date: date
    type: str
    description: str
    amount: Decimal
    balance: Decimal
    account: Optional[Account] = field(default=None, compare=False, repr=False)
