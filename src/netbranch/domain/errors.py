"""Shared error messages and error types."""


class NetBranchError(Exception):
    """Base class for all netbranch errors."""


class AuthenticationError(NetBranchError):
    """Login page unreachable or credentials rejected."""


class NavigationError(NetBranchError):
    """An expected link, form or button was not found."""


class InvalidArgument(NetBranchError, ValueError):
    """Missing or malformed caller input.

    Preserves ValueError compatibility for existing input handling.
    """


class WebSessionError(NetBranchError):
    """Failure reported by the web session collaborator."""


class FetchError(WebSessionError):
    """A request failed at the network or HTTP level."""


class FormNotFoundError(WebSessionError):
    """No form, field or button matched."""


class LinkNotFoundError(WebSessionError):
    """No link with matching text on the current page."""


def missing_setting(name: str) -> str:
    """Return message for a required setting that was not supplied."""
    return f"Missing required setting '{name}'"


def invalid_date_bound(name: str, value: object) -> str:
    """Return message for a missing or unusable date bound."""
    if value is None:
        return f"Missing required date bound '{name}'"
    return f"Cannot interpret {name} {value!r} as a date"


def account_detached(account_no: str) -> str:
    """Return message for an account with no owning session."""
    return f"Account {account_no} is not attached to a session"


def login_failed(account: str, reason: str) -> str:
    """Return message for a failed login."""
    return f"Could not log in as account '{account}': {reason}"


def link_not_found(pattern: str) -> str:
    """Return message for a missing link."""
    return f"No link matching '{pattern}' on the current page"


def form_not_found(form_name: str | None, fields: list[str]) -> str:
    """Return message for a missing form."""
    if form_name is not None:
        return f"No form named '{form_name}' on the current page"
    return f"No form with fields {', '.join(fields)} on the current page"
