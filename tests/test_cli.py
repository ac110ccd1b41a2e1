"""
Unit tests for the landscape-cli commands.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from landscape_cli import (
    AttachmentReadError,
    Computer,
    HTTPError,
    Script,
    ScriptExecution,
    ScriptNotFoundError,
    __version__
)
from landscape_cli.cli import cli

from conftest import (
    ACCESS_KEY_ID,
    COMPUTER_PAYLOAD,
    ENDPOINT,
    EXECUTION_PAYLOAD,
    SECRET_KEY,
    script_payload,
)

ENVIRON = {
    "LANDSCAPE_API_URI": ENDPOINT,
    "LANDSCAPE_API_KEY": ACCESS_KEY_ID,
    "LANDSCAPE_API_SECRET": SECRET_KEY,
}


class TestCli:
    """Tests for the CLI commands."""

    @pytest.fixture
    def cli_runner(self):
        """Create a Click CLI runner."""
        return CliRunner()

    @pytest.fixture
    def mock_client(self):
        """Patch the client class and yield the instance commands receive."""
        with patch("landscape_cli.cli.LandscapeClient") as mock_client_class, \
             patch("landscape_cli.cli.load_dotenv"):
            client = MagicMock()
            mock_client_class.return_value.__enter__.return_value = client
            yield client

    def invoke(self, cli_runner, args):
        return cli_runner.invoke(cli, args, env=ENVIRON)

    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_credentials(self, cli_runner):
        result = cli_runner.invoke(cli, ["get-script", "--help"])

        assert result.exit_code == 0
        assert "TITLE" in result.output

    def test_missing_credentials(self, cli_runner):
        with patch("landscape_cli.cli.load_dotenv"):
            result = cli_runner.invoke(
                cli, ["get-scripts"], env=dict(ENVIRON, LANDSCAPE_API_SECRET=None)
            )

        assert result.exit_code == 1
        assert "LANDSCAPE_API_SECRET" in result.output

    def test_invalid_endpoint(self, cli_runner):
        with patch("landscape_cli.cli.load_dotenv"):
            result = cli_runner.invoke(
                cli, ["get-scripts"], env=dict(ENVIRON, LANDSCAPE_API_URI="nohost")
            )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_get_script(self, cli_runner, mock_client):
        mock_client.get_script.return_value = Script.model_validate(
            script_payload(11, "deploy", ["init.sh"])
        )

        result = self.invoke(cli_runner, ["get-script", "dep"])

        assert result.exit_code == 0
        mock_client.get_script.assert_called_once_with("dep")
        data = json.loads(result.output)
        assert data["id"] == 11
        assert data["attachments"] == ["init.sh"]

    def test_get_script_not_found(self, cli_runner, mock_client):
        mock_client.get_script.side_effect = ScriptNotFoundError("nope")

        result = self.invoke(cli_runner, ["get-script", "nope"])

        assert result.exit_code == 1
        assert "Script not found: nope" in result.output

    def test_get_scripts(self, cli_runner, mock_client):
        mock_client.get_scripts.return_value = [
            Script.model_validate(script_payload(11, "deploy")),
            Script.model_validate(script_payload(13, "backup")),
        ]

        result = self.invoke(cli_runner, ["get-scripts"])

        assert result.exit_code == 0
        assert [s["title"] for s in json.loads(result.output)] == ["deploy", "backup"]

    def test_get_script_attachments(self, cli_runner, mock_client):
        mock_client.get_script_attachments.return_value = ["dump.sh", "rotate.sh"]

        result = self.invoke(cli_runner, ["get-script-attachments", "backup"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["dump.sh", "rotate.sh"]

    def test_create_script_attachment(self, cli_runner, mock_client, tmp_path):
        attachment = tmp_path / "init.sh"
        attachment.write_bytes(b"echo hi")
        mock_client.create_script_attachment.return_value = "init.sh"

        result = self.invoke(cli_runner, ["create-script-attachment", "deploy", str(attachment)])

        assert result.exit_code == 0
        assert result.output.strip() == "init.sh"
        mock_client.create_script_attachment.assert_called_once_with("deploy", str(attachment))

    def test_create_script_attachment_unreadable(self, cli_runner, mock_client):
        mock_client.create_script_attachment.side_effect = AttachmentReadError(
            "Unable to read missing.sh"
        )

        result = self.invoke(cli_runner, ["create-script-attachment", "deploy", "missing.sh"])

        assert result.exit_code == 1
        assert "Unable to read missing.sh" in result.output

    def test_remove_script_attachment(self, cli_runner, mock_client):
        mock_client.remove_script_attachment.return_value = "true"

        result = self.invoke(cli_runner, ["remove-script-attachment", "backup", "dump.sh"])

        assert result.exit_code == 0
        mock_client.remove_script_attachment.assert_called_once_with("backup", "dump.sh")

    def test_execute_script(self, cli_runner, mock_client):
        mock_client.execute_script.return_value = ScriptExecution.model_validate(
            EXECUTION_PAYLOAD
        )

        result = self.invoke(cli_runner, ["execute-script", "deploy", "hostname:web*"])

        assert result.exit_code == 0
        mock_client.execute_script.assert_called_once_with("hostname:web*", "deploy")
        data = json.loads(result.output)
        assert data["type"] == "ActivityGroup"
        assert data["id"] == 4242

    def test_execute_script_not_found(self, cli_runner, mock_client):
        mock_client.execute_script.side_effect = ScriptNotFoundError("nope")

        result = self.invoke(cli_runner, ["execute-script", "nope", "tag:web"])

        assert result.exit_code == 1
        assert "Script not found: nope" in result.output

    def test_get_all_hosts(self, cli_runner, mock_client):
        mock_client.get_computers.return_value = [Computer.model_validate(COMPUTER_PAYLOAD)]

        result = self.invoke(cli_runner, ["get-all-hosts"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["hostname"] == "web-1"
        assert data[0]["cloud_instance_metadata"] == {}

    def test_request_failure(self, cli_runner, mock_client):
        mock_client.get_computers.side_effect = HTTPError("HTTP request failed", status_code=None)

        result = self.invoke(cli_runner, ["get-all-hosts"])

        assert result.exit_code == 2
        assert "Request failed" in result.output
