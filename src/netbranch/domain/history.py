"""Transaction extraction from account history pages."""

import logging
import re
from datetime import date
from typing import Optional

from netbranch.domain.balances import cell_text
from netbranch.domain.entities import Account, Transaction
from netbranch.utils.amount_parser import is_amount, parse_amount
from netbranch.utils.date_parser import parse_date
from netbranch.utils.markup import parse_html
from netbranch.web.base import WebSession

logger = logging.getLogger(__name__)

HISTORY_LINK = r"Account History"
HISTORY_BUTTON = None  # the history form is submitted with its default button
HISTORY_ROW_CELLS = 5

ROW_DATE = re.compile(r"\d{1,2}/\d{1,2}/\d{4}")


def history_form_fields(start: date, end: date) -> dict[str, str]:
    """Build the six date fields of the history request form.

    Months are zero-padded to two digits; days and years are not.
    """
    return {
        "FM": f"{start.month:02d}",
        "FD": str(start.day),
        "FY": str(start.year),
        "TM": f"{end.month:02d}",
        "TD": str(end.day),
        "TY": str(end.year),
    }


def _parse_transaction_row(cells: list[str], account: Optional[Account]) -> Optional[Transaction]:
    # Some pages emit a broken cell fragment ahead of the date; start at the
    # first cell that holds a date.
    for offset, text in enumerate(cells):
        if ROW_DATE.fullmatch(text):
            break
    else:
        return None

    group = cells[offset:offset + HISTORY_ROW_CELLS]
    if len(group) != HISTORY_ROW_CELLS:
        return None
    when, kind, description, amount, balance = group
    if not (is_amount(amount) and is_amount(balance)):
        return None

    return Transaction(
        date=parse_date(when),
        type=kind,
        description=description,
        amount=parse_amount(amount),
        balance=parse_amount(balance),
        account=account,
    )


def extract_transactions(content: str, account: Optional[Account] = None) -> list[Transaction]:
    """Extract transaction rows from a history page, oldest first.

    The portal lists the newest transaction first; the rows are returned
    reversed. Rows that do not have a date followed by type, description,
    amount and balance are skipped.

    Args:
        content: HTML of the history results page
        account: Account the rows belong to, attached to each Transaction

    Returns:
        List of Transaction records
    """
    doc = parse_html(content)
    if doc is None:
        return []

    transactions = []
    for row in doc.iter("tr"):
        cells = [cell_text(cell) for cell in row.xpath("./td")]
        transaction = _parse_transaction_row(cells, account)
        if transaction is not None:
            transactions.append(transaction)

    transactions.reverse()
    logger.debug("extracted %d transactions", len(transactions))
    return transactions


def fetch_transactions(web: WebSession, account: Account, start: date, end: date) -> list[Transaction]:
    """Navigate a logged-in web session to an account's history and scrape it.

    Raises:
        LinkNotFoundError: If the history or account link is missing
        FormNotFoundError: If the date range form is missing
    """
    web.follow_link(HISTORY_LINK)
    web.follow_link(re.escape(f"({account.account_no})"))
    content = web.submit_form(history_form_fields(start, end), button=HISTORY_BUTTON)
    return extract_transactions(content, account)
