"""Scrape balances and transaction histories from NetBranch online banking."""

from netbranch.config import NetBranchConfig, load_config
from netbranch.domain.entities import Account, Transaction, WelcomeBanner
from netbranch.domain.errors import (
    AuthenticationError,
    InvalidArgument,
    NavigationError,
    NetBranchError,
)
from netbranch.domain.session import NetBranch

__version__ = "0.1.0"

__all__ = [
    "NetBranch",
    "NetBranchConfig",
    "load_config",
    "Account",
    "Transaction",
    "WelcomeBanner",
    "NetBranchError",
    "AuthenticationError",
    "NavigationError",
    "InvalidArgument",
]
