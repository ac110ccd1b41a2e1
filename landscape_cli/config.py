"""
Credentials for the Landscape API.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import ENV_API_KEY, ENV_API_SECRET, ENV_API_URI
from .exceptions import ConfigurationError
from .signer import split_endpoint


@dataclass(frozen=True)
class Credentials:
    """
    Endpoint URL, access key id and shared secret of a Landscape account.

    Validated on construction so that a bad endpoint is reported before
    any network activity.
    """

    endpoint: str
    access_key_id: str
    secret_key: str

    def __post_init__(self):
        for field_name in ('endpoint', 'access_key_id', 'secret_key'):
            if not getattr(self, field_name):
                raise ConfigurationError(f"{field_name} cannot be empty")
        split_endpoint(self.endpoint)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        """
        Load credentials from environment variables.

        Raises:
            ConfigurationError: If a variable is missing or empty
        """
        if environ is None:
            environ = os.environ

        values = {}
        for name in (ENV_API_URI, ENV_API_KEY, ENV_API_SECRET):
            value = environ.get(name)
            if not value:
                raise ConfigurationError(f"{name} is not set")
            values[name] = value

        return cls(
            endpoint=values[ENV_API_URI],
            access_key_id=values[ENV_API_KEY],
            secret_key=values[ENV_API_SECRET],
        )

    def __repr__(self) -> str:
        return (f"Credentials(endpoint={self.endpoint!r}, "
                f"access_key_id={self.access_key_id!r}, secret_key='***')")
