"""Factory functions for creating web sessions."""

from typing import Optional

from netbranch.config import DEFAULT_USER_AGENT, NetBranchConfig
from netbranch.web.requests_session import RequestsWebSession


def create_web_session(config: Optional[NetBranchConfig] = None) -> RequestsWebSession:
    """Create a requests-backed web session.

    Args:
        config: Connection settings. If None, defaults are used for the
            timeout and user agent.

    Returns:
        RequestsWebSession instance
    """
    if config is None:
        return RequestsWebSession(user_agent=DEFAULT_USER_AGENT)
    return RequestsWebSession(timeout=config.timeout, user_agent=config.user_agent)
