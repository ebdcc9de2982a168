"""Web session layer for netbranch."""

from netbranch.web.base import WebSession
from netbranch.web.factories import create_web_session
from netbranch.web.requests_session import RequestsWebSession

__all__ = ["WebSession", "RequestsWebSession", "create_web_session"]
