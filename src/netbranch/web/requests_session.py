"""requests-backed web session."""

from typing import Optional

import requests

from netbranch.config import DEFAULT_USER_AGENT
from netbranch.domain.errors import FetchError
from netbranch.web.base import WebSession


class RequestsWebSession(WebSession):
    """WebSession over a requests.Session, keeping cookies between requests."""

    def __init__(self, timeout: float = 30, user_agent: str = DEFAULT_USER_AGENT):
        """Initialize the session.

        Args:
            timeout: Seconds to wait for each response
            user_agent: User-Agent header sent with every request
        """
        super().__init__()
        self.timeout = timeout
        self.http = requests.Session()
        self.http.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        })

    def _send(self, method: str, url: str, data: Optional[list[tuple[str, str]]] = None) -> tuple[str, str]:
        headers = {"Referer": self.url} if self.url else None
        try:
            response = self.http.request(
                method, url, data=data, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"{method} {url} failed: {e}") from e
        return response.url, response.text

    def close(self) -> None:
        """Close the underlying connection pool."""
        self.http.close()
