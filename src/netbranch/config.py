"""Connection settings for a NetBranch portal."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from netbranch.domain.errors import InvalidArgument, missing_setting

ENV_URL = "NETBRANCH_URL"
ENV_ACCOUNT = "NETBRANCH_ACCOUNT"
ENV_PASSWORD = "NETBRANCH_PASSWORD"
ENV_TIMEOUT = "NETBRANCH_TIMEOUT"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:128.0) Gecko/20100101 Firefox/128.0"
)


@dataclass(frozen=True)
class NetBranchConfig:
    """Portal URL, credentials and transport options."""

    url: str
    account: str
    password: str = field(repr=False)
    timeout: float = 30
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        for name in ("url", "account", "password"):
            if not getattr(self, name):
                raise InvalidArgument(missing_setting(name))


def load_config(environ: Optional[Mapping[str, str]] = None, **overrides) -> NetBranchConfig:
    """Build a config from NETBRANCH_* environment variables.

    Keyword arguments that are not None take precedence over the
    environment.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        NetBranchConfig instance

    Raises:
        InvalidArgument: If a required setting is missing or the timeout
            is not a number
    """
    if environ is None:
        environ = os.environ

    values = {
        "url": environ.get(ENV_URL),
        "account": environ.get(ENV_ACCOUNT),
        "password": environ.get(ENV_PASSWORD),
    }

    timeout = environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            values["timeout"] = float(timeout)
        except ValueError as e:
            raise InvalidArgument(f"{ENV_TIMEOUT} must be a number, got '{timeout}'") from e

    values.update({key: value for key, value in overrides.items() if value is not None})
    return NetBranchConfig(**values)
