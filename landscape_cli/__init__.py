"""
Landscape API client and command-line tool.

Signs requests for the Landscape systems-management API (signature
version 2, HMAC-SHA256) and wraps the script and computer actions.

Example usage:
    from landscape_cli import Credentials, LandscapeClient

    client = LandscapeClient(Credentials.from_env())
    for script in client.get_scripts():
        print(script.title)
"""

from .client import LandscapeClient, build_attachment_payload, find_script
from .config import Credentials
from .exceptions import (
    LandscapeClientError,
    ConfigurationError,
    ScriptNotFoundError,
    HTTPError,
    InvalidResponseError,
    AttachmentReadError
)
from .models import Computer, Creator, Script, ScriptExecution
from .signer import (
    SignedRequest,
    canonical_query,
    create_signature,
    encode_rfc3986,
    sign_parameters
)

__version__ = "1.0.0"
__all__ = [
    "LandscapeClient",
    "Credentials",
    "build_attachment_payload",
    "find_script",
    "LandscapeClientError",
    "ConfigurationError",
    "ScriptNotFoundError",
    "HTTPError",
    "InvalidResponseError",
    "AttachmentReadError",
    "Computer",
    "Creator",
    "Script",
    "ScriptExecution",
    "SignedRequest",
    "canonical_query",
    "create_signature",
    "encode_rfc3986",
    "sign_parameters"
]
