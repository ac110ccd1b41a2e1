"""
Request signing for the Landscape API.

Every call to the Landscape API carries its parameters as a form-encoded
query, authenticated with an HMAC-SHA256 signature (signature version 2).
The signature covers the HTTP method, the endpoint host and path, and the
canonical query built from the parameters in ascending key order.
"""

import base64
import datetime
import hashlib
import hmac
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from urllib.parse import quote, urlencode, urlsplit

from .constants import (
    API_VERSION,
    PARAM_ACCESS_KEY_ID,
    PARAM_SIGNATURE,
    PARAM_SIGNATURE_METHOD,
    PARAM_SIGNATURE_VERSION,
    PARAM_TIMESTAMP,
    PARAM_VERSION,
    PRE_ENCODED_PREFIX,
    SIGNATURE_METHOD,
    SIGNATURE_VERSION,
    TIMESTAMP_FORMAT,
    UNRESERVED_CHARACTERS,
)
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def encode_rfc3986(text: str) -> str:
    """
    Percent-encode text the way the Landscape server expects it.

    Unreserved characters pass through, space becomes ``%20`` and every
    other character is written as ``%XX`` from its code point, so ``é``
    encodes to ``%E9`` and ``€`` to ``%20AC``.
    """
    encoded = []
    for character in text:
        if character in UNRESERVED_CHARACTERS:
            encoded.append(character)
        elif character == " ":
            encoded.append("%20")
        else:
            encoded.append("%{:02X}".format(ord(character)))
    return "".join(encoded)


def _is_pre_encoded(key: str) -> bool:
    return key == PARAM_TIMESTAMP or key.startswith(PRE_ENCODED_PREFIX)


def canonical_query(parameters: Mapping[str, str]) -> str:
    """
    Build the canonical query string.

    Keys are sorted and always encoded. Values are encoded except for
    ``timestamp`` and keys starting with ``file``, which are supplied
    already encoded.
    """
    pairs = []
    for key in sorted(parameters):
        value = parameters[key]
        if not _is_pre_encoded(key):
            value = encode_rfc3986(value)
        pairs.append(f"{encode_rfc3986(key)}={value}")
    return "&".join(pairs)


def string_to_sign(http_method: str, host: str, path: str, query: str) -> str:
    """Lay out the four signed lines: method, host, path and query."""
    return "\n".join([http_method, host.lower(), path, query])


def split_endpoint(endpoint: str) -> Tuple[str, str]:
    """
    Return the lower-cased host and the path of an endpoint URL.

    Raises:
        ConfigurationError: If the URL cannot be parsed or has no host
    """
    try:
        parts = urlsplit(endpoint)
        host = parts.hostname
    except ValueError as e:
        raise ConfigurationError(f"Invalid endpoint URL {endpoint!r}: {e}") from e

    if parts.scheme not in ("http", "https") or not host:
        raise ConfigurationError(f"Invalid endpoint URL {endpoint!r}: no host")

    return host, parts.path or "/"


def create_signature(secret_key: str, parameters: Mapping[str, str],
                     http_method: str, host: str, path: str) -> str:
    """
    Compute the base64 HMAC-SHA256 signature of a request.

    Args:
        secret_key: Shared secret
        parameters: Request parameters, authentication fields included
        http_method: HTTP method, used as given
        host: Endpoint host
        path: Endpoint path

    Returns:
        Base64-encoded (padded) raw digest
    """
    message = string_to_sign(http_method, host, path, canonical_query(parameters))
    return _hmac_base64(secret_key, message)


def _hmac_base64(secret_key: str, message: str) -> str:
    logger.debug("String to sign:\n%s", message)
    mac = hmac.new(
        secret_key.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha256
    )
    return base64.b64encode(mac.digest()).decode('ascii')


def _utc_timestamp(moment: Optional[datetime.datetime] = None) -> str:
    if moment is None:
        moment = datetime.datetime.now(datetime.timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(datetime.timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def format_timestamp(moment: Optional[datetime.datetime] = None) -> str:
    """Format a UTC moment (default: now) as an encoded request timestamp."""
    return encode_rfc3986(_utc_timestamp(moment))


@dataclass(frozen=True)
class SignedRequest:
    """
    A fully populated, signed parameter set.

    ``parameters`` holds the values as they were signed, with ``timestamp``,
    ``file*`` and ``signature`` percent-encoded. ``form`` holds the same
    fields unencoded, which is what goes on the wire.
    """

    parameters: Mapping[str, str]
    form: Mapping[str, str]
    signature: str
    canonical_query: str
    string_to_sign: str

    @property
    def query_string(self) -> str:
        """Form-encoded body: each unencoded value percent-encoded once as UTF-8."""
        return urlencode(sorted(self.form.items()), quote_via=quote)


def sign_parameters(parameters: Mapping[str, str], http_method: str, endpoint: str,
                    access_key_id: str, secret_key: str,
                    now: Optional[datetime.datetime] = None) -> SignedRequest:
    """
    Add the authentication fields to a parameter set and sign it.

    Values are given unencoded. The ``timestamp`` and ``file*`` values are
    pre-encoded before canonicalization, so the canonical query carries
    them exactly once. The given mapping is left untouched; the returned
    request holds new read-only mappings.

    Raises:
        ConfigurationError: If the endpoint URL has no host
    """
    host, path = split_endpoint(endpoint)

    form = dict(parameters)
    form.update({
        PARAM_ACCESS_KEY_ID: access_key_id,
        PARAM_SIGNATURE_METHOD: SIGNATURE_METHOD,
        PARAM_SIGNATURE_VERSION: SIGNATURE_VERSION,
        PARAM_VERSION: API_VERSION,
        PARAM_TIMESTAMP: _utc_timestamp(now),
    })

    params = {
        key: encode_rfc3986(value) if _is_pre_encoded(key) else value
        for key, value in form.items()
    }

    query = canonical_query(params)
    message = string_to_sign(http_method, host, path, query)
    signature = _hmac_base64(secret_key, message)

    form[PARAM_SIGNATURE] = signature
    params[PARAM_SIGNATURE] = encode_rfc3986(signature)

    return SignedRequest(
        parameters=MappingProxyType(dict(sorted(params.items()))),
        form=MappingProxyType(dict(sorted(form.items()))),
        signature=signature,
        canonical_query=query,
        string_to_sign=message,
    )
