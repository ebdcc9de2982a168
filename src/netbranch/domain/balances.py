"""Balance extraction from the page shown after login."""

import logging
import re
from typing import TYPE_CHECKING, Optional

import lxml.html

from netbranch.domain.entities import Account, WelcomeBanner
from netbranch.utils.amount_parser import is_amount, parse_amount
from netbranch.utils.markup import parse_html

if TYPE_CHECKING:
    from netbranch.domain.session import NetBranch

logger = logging.getLogger(__name__)

# Fixed column order of the balances table: name, balance, available.
NAME_COLUMN = 0
BALANCE_COLUMN = 1
AVAILABLE_COLUMN = 2
ACCOUNT_ROW_CELLS = 3

ACCOUNT_LABEL = re.compile(r"([^(<]+?\s+\(([^)]+)\))")
WELCOME_HEADING = re.compile(r"\s*welcome\b\s*(.*?)\s*$", re.IGNORECASE | re.DOTALL)
MEMBER_NUMBER = re.compile(r"member\s*#\s*(\d+)", re.IGNORECASE)


def cell_text(element: lxml.html.HtmlElement) -> str:
    """Visible text of an element with whitespace collapsed."""
    return " ".join(element.text_content().split())


def parse_welcome(content: str) -> Optional[WelcomeBanner]:
    """Find the "Welcome <user>" banner and the member number after it.

    Only a heading followed by "Member #<digits>" counts; login pages
    greet visitors with a welcome heading too.

    Returns:
        WelcomeBanner, or None if the page has no member banner
    """
    doc = parse_html(content)
    if doc is None:
        return None

    for heading in doc.iter("h3"):
        match = WELCOME_HEADING.match(heading.text_content())
        if not match:
            continue

        member = MEMBER_NUMBER.match((heading.tail or "").strip())
        if not member:
            continue

        following = heading.getnext()
        private = ""
        if following is not None and following.tag == "b":
            private = cell_text(following)

        return WelcomeBanner(
            user=" ".join(match.group(1).split()),
            member_no=member.group(1),
            private=private,
        )
    return None


def _parse_account_row(row: lxml.html.HtmlElement, session: Optional["NetBranch"]) -> Optional[Account]:
    cells = row.xpath("./td")
    if len(cells) != ACCOUNT_ROW_CELLS:
        return None

    anchor = cells[NAME_COLUMN].find(".//a")
    if anchor is None:
        return None
    label = ACCOUNT_LABEL.fullmatch(cell_text(anchor))
    if not label:
        return None

    balance = cell_text(cells[BALANCE_COLUMN])
    available = cell_text(cells[AVAILABLE_COLUMN])
    if not (is_amount(balance) and is_amount(available)):
        return None

    return Account(
        name=label.group(1),
        account_no=label.group(2),
        balance=parse_amount(balance),
        available=parse_amount(available),
        session=session,
    )


def extract_accounts(content: str, session: Optional["NetBranch"] = None) -> list[Account]:
    """Extract account rows from the balances page, in page order.

    A row is a table row of three cells: an anchor reading
    "<name> (<account_no>)", then the balance, then the available amount.
    Rows of any other shape are skipped, so a page with no accounts and a
    page the layout no longer matches both give an empty list.

    Args:
        content: HTML of the page shown after login
        session: Owning session, attached to each Account

    Returns:
        List of Account records
    """
    doc = parse_html(content)
    if doc is None:
        return []

    accounts = []
    seen = set()
    for row in doc.iter("tr"):
        account = _parse_account_row(row, session)
        if account is None:
            continue
        if account.account_no in seen:
            logger.debug("skipping repeated account %s", account.account_no)
            continue
        seen.add(account.account_no)
        accounts.append(account)

    logger.debug("extracted %d accounts", len(accounts))
    return accounts
