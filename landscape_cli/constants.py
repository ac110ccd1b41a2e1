"""
Constants for the Landscape API client.
Values follow the Landscape low-level HTTP request signing protocol.
"""

import string

# Signature parameters (sent with every request)
SIGNATURE_METHOD = "HmacSHA256"
SIGNATURE_VERSION = "2"
API_VERSION = "2011-08-01"

# Authentication field names
PARAM_ACCESS_KEY_ID = "access_key_id"
PARAM_SIGNATURE_METHOD = "signature_method"
PARAM_SIGNATURE_VERSION = "signature_version"
PARAM_VERSION = "version"
PARAM_TIMESTAMP = "timestamp"
PARAM_SIGNATURE = "signature"

# Values under these keys are inserted already encoded
PRE_ENCODED_PREFIX = "file"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

UNRESERVED_CHARACTERS = frozenset(
    string.ascii_uppercase + string.ascii_lowercase + string.digits + "-._~"
)

ATTACHMENT_SEPARATOR = "$$"

# Environment variables holding the credentials
ENV_API_URI = "LANDSCAPE_API_URI"
ENV_API_KEY = "LANDSCAPE_API_KEY"
ENV_API_SECRET = "LANDSCAPE_API_SECRET"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,  # HTTP timeout in seconds
}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
