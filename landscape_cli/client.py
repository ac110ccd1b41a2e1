"""
Landscape API client.

This module wraps the Landscape scripts and computers API. Every call is a
signed POST to the account endpoint with the parameters sent as a
form-encoded body, and the JSON response is decoded into typed models.
"""

import base64
import datetime
import logging
import os
from typing import Any, List, Optional, Sequence, Union

import requests
from pydantic import TypeAdapter, ValidationError

from .config import Credentials
from .constants import (
    ATTACHMENT_SEPARATOR,
    DEFAULT_CONFIG,
    FORM_CONTENT_TYPE,
)
from .exceptions import (
    AttachmentReadError,
    ConfigurationError,
    HTTPError,
    InvalidResponseError,
    ScriptNotFoundError,
)
from .models import Computer, Script, ScriptExecution
from .signer import SignedRequest, sign_parameters

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def find_script(scripts: Sequence[Script], title: str) -> Script:
    """
    Select the first script whose title starts with ``title``.

    The API has no call to fetch a single script, so lookups scan the full
    list. The match is case-sensitive and the first one in server order
    wins; an ambiguous prefix resolves to whatever the server lists first.

    Raises:
        ScriptNotFoundError: If no title matches
    """
    for script in scripts:
        if script.title.startswith(title):
            return script
    raise ScriptNotFoundError(title)


def build_attachment_payload(filename: str, content: bytes) -> str:
    """Return the ``file`` parameter value (before encoding) for an upload."""
    encoded = base64.b64encode(content).decode('ascii')
    return f"{filename}{ATTACHMENT_SEPARATOR}{encoded}"


class LandscapeClient:
    """
    Client for the Landscape scripts and computers API.

    Issues one synchronous request per operation; operations that resolve
    a script by title first fetch the script list, then make their own call.
    """

    def __init__(self, credentials: Credentials, session: Optional[requests.Session] = None,
                 **config):
        """
        Initialize the client.

        Args:
            credentials: Endpoint and key pair of the account
            session: Optional requests session to reuse
            **config: Configuration options (timeout)
        """
        self.credentials = credentials

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self.session = session if session is not None else requests.Session()

    def _validate_config(self):
        """Validate client configuration."""
        timeout = self.config['timeout']
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def sign(self, parameters, now: Optional[datetime.datetime] = None) -> SignedRequest:
        """Sign a parameter set for a POST to the configured endpoint."""
        return sign_parameters(
            parameters,
            'POST',
            self.credentials.endpoint,
            self.credentials.access_key_id,
            self.credentials.secret_key,
            now=now,
        )

    def _make_request(self, action: str, **parameters: str) -> requests.Response:
        """
        Sign and send one API action.

        Raises:
            HTTPError: If the request fails or the status is not a success
        """
        parameters['action'] = action
        signed = self.sign(parameters)

        logger.debug("Calling %s on %s", action, self.credentials.endpoint)
        try:
            response = self.session.post(
                self.credentials.endpoint,
                data=signed.query_string.encode('ascii'),
                headers={'Content-Type': FORM_CONTENT_TYPE},
                timeout=self.config['timeout'],
            )
        except requests.RequestException as e:
            logger.warning("%s request failed: %s", action, e)
            raise HTTPError(f"HTTP request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning("%s returned HTTP %s", action, response.status_code)
            raise HTTPError(
                f"{action} failed with HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _decode(response: requests.Response, result_type: Any):
        """Decode a JSON response body into ``result_type``."""
        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Response is not valid JSON: {e}", status_code=response.status_code
            ) from e

        try:
            return TypeAdapter(result_type).validate_python(payload)
        except ValidationError as e:
            raise InvalidResponseError(
                f"Unexpected response shape: {e}", status_code=response.status_code
            ) from e

    def get_scripts(self) -> List[Script]:
        """Return every script visible to the account, in server order."""
        response = self._make_request('GetScripts')
        return self._decode(response, List[Script])

    def get_script(self, title: str) -> Script:
        """
        Fetch the script list and return the first title match.

        Raises:
            ScriptNotFoundError: If no title starts with ``title``
        """
        return find_script(self.get_scripts(), title)

    def get_script_attachments(self, title: str) -> List[str]:
        """Return the attachment filenames of a script."""
        return list(self.get_script(title).attachments)

    def execute_script(self, query: str, title: str) -> ScriptExecution:
        """
        Run a script on the computers selected by ``query``.

        Args:
            query: Landscape computer query, e.g. ``tag:web``
            title: Script title or title prefix

        Returns:
            The activity created for the execution
        """
        script = self.get_script(title)
        response = self._make_request(
            'ExecuteScript',
            query=query,
            script_id=str(script.id),
        )
        return self._decode(response, ScriptExecution)

    def create_script_attachment(self, title: str, path: PathLike) -> str:
        """
        Upload a local file as an attachment of a script.

        The file is read before any request is made.

        Raises:
            AttachmentReadError: If the file cannot be read
        """
        try:
            with open(path, 'rb') as attachment:
                content = attachment.read()
        except OSError as e:
            raise AttachmentReadError(f"Unable to read {os.fspath(path)}: {e}") from e

        filename = os.path.basename(os.fspath(path))
        script = self.get_script(title)

        response = self._make_request(
            'CreateScriptAttachment',
            script_id=str(script.id),
            file=build_attachment_payload(filename, content),
        )
        return response.text

    def remove_script_attachment(self, title: str, filename: PathLike) -> str:
        """
        Remove an attachment from a script.

        Only the base name is sent.
        """
        name = os.path.basename(os.fspath(filename))
        script = self.get_script(title)

        response = self._make_request(
            'RemoveScriptAttachment',
            script_id=str(script.id),
            filename=name,
        )
        return response.text

    def get_computers(self) -> List[Computer]:
        """Return every registered computer."""
        response = self._make_request('GetComputers')
        return self._decode(response, List[Computer])

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
