"""
Shared fixtures for the Landscape client tests.
"""

import base64
import hashlib
import hmac
from urllib.parse import quote

import pytest

from landscape_cli import Credentials

ENDPOINT = "https://landscape.example.com/api/"
ACCESS_KEY_ID = "TESTKEYID0123456789"
SECRET_KEY = "test-secret-key"


def _escape(text):
    # Non-ASCII characters get one escape per code point
    return "".join(
        quote(character, safe='') if ord(character) < 128 else f"%{ord(character):02X}"
        for character in text
    )


def reference_signature(secret_key, parameters, http_method, host, path):
    """Independent implementation of the signature over unencoded parameters."""
    query = "&".join(
        f"{_escape(key)}={_escape(value)}"
        for key, value in sorted(parameters.items())
    )
    message = f"{http_method}\n{host.lower()}\n{path}\n{query}"
    digest = hmac.new(
        secret_key.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode('ascii')


def script_payload(script_id, title, attachments=None):
    return {
        "id": script_id,
        "title": title,
        "username": "admin",
        "creator": {"id": 1, "name": "Admin", "email": "admin@example.com"},
        "time_limit": 300,
        "access_group": "global",
        "attachments": attachments or [],
    }


EXECUTION_PAYLOAD = {
    "id": 4242,
    "creation_time": "2024-01-02T03:04:05Z",
    "creator": {"id": 1, "name": "Admin", "email": "admin@example.com"},
    "computer_id": None,
    "parent_id": None,
    "summary": "Run script: deploy",
    "type": "ActivityGroup",
    "result_text": None,
}


COMPUTER_PAYLOAD = {
    "id": 7,
    "hostname": "web-1",
    "title": "Web 1",
    "comment": "",
    "total_memory": 2048,
    "total_swap": 1024,
    "tags": ["web"],
    "annotations": {"owner": "ops"},
    "cloud_instance_metadata": {},
    "reboot_required_flag": False,
    "access_group": "global",
    "distribution": "22.04",
    "vm_info": "kvm",
    "container_info": "",
    "update_manager_prompt": "lts",
    "last_ping_time": "2024-01-02T03:04:05Z",
    "last_exchange_time": "2024-01-02T03:03:05Z",
}


@pytest.fixture
def credentials():
    """Create test credentials."""
    return Credentials(ENDPOINT, ACCESS_KEY_ID, SECRET_KEY)


@pytest.fixture
def scripts_payload():
    """Script list as the server returns it."""
    return [
        script_payload(11, "deploy", ["init.sh"]),
        script_payload(12, "deploy-v2"),
        script_payload(13, "backup", ["dump.sh", "rotate.sh"]),
    ]
