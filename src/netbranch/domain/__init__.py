"""Domain layer for netbranch.

Only records and errors are exported here; config and utils import from
this package, so the gateway and extractors are imported directly.
"""

from netbranch.domain.entities import Account, Transaction, WelcomeBanner
from netbranch.domain.errors import (
    AuthenticationError,
    InvalidArgument,
    NavigationError,
    NetBranchError,
)

__all__ = [
    "Account",
    "Transaction",
    "WelcomeBanner",
    "NetBranchError",
    "AuthenticationError",
    "NavigationError",
    "InvalidArgument",
]
