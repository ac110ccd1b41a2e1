"""
Command-line interface for the Landscape API.

Credentials are read from LANDSCAPE_API_URI, LANDSCAPE_API_KEY and
LANDSCAPE_API_SECRET, optionally through a .env file.
"""

import functools
import json
import logging
import sys

import click
from dotenv import load_dotenv

from . import __version__
from .client import LandscapeClient
from .config import Credentials
from .exceptions import (
    AttachmentReadError,
    ConfigurationError,
    HTTPError,
    LandscapeClientError,
    ScriptNotFoundError,
)

logger = logging.getLogger(__name__)


def _error(message: str, exit_code: int = 1) -> None:
    click.echo(click.style("Error: ", fg="red", bold=True) + message, err=True)
    sys.exit(exit_code)


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


def _load_client() -> LandscapeClient:
    load_dotenv()
    try:
        credentials = Credentials.from_env()
    except ConfigurationError as e:
        _error(f"Invalid configuration: {e}")
    return LandscapeClient(credentials)


def with_client(command):
    """
    Run a command with a client built from the environment.

    Client errors are reported and turned into a non-zero exit; a missing
    script prints a not-found message instead of an error.
    """

    @functools.wraps(command)
    def wrapper(**kwargs):
        with _load_client() as client:
            try:
                return command(client, **kwargs)
            except ScriptNotFoundError as e:
                click.echo(f"Script not found: {e.title}")
                sys.exit(1)
            except AttachmentReadError as e:
                _error(str(e))
            except HTTPError as e:
                logger.debug("Request failed", exc_info=True)
                _error(f"Request failed: {e}", exit_code=2)
            except LandscapeClientError as e:
                _error(str(e))

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="landscape-cli")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and signatures.")
def cli(verbose: bool) -> None:
    """
    Manage Landscape scripts and computers.

    Use 'landscape-cli COMMAND --help' for more information on a command.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


@cli.command("get-script")
@click.argument("title")
@with_client
def get_script(client: LandscapeClient, title: str) -> None:
    """Show the first script whose title starts with TITLE."""
    script = client.get_script(title)
    _echo_json(script.model_dump(mode="json"))


@cli.command("get-scripts")
@with_client
def get_scripts(client: LandscapeClient) -> None:
    """List all scripts."""
    _echo_json([script.model_dump(mode="json") for script in client.get_scripts()])


@cli.command("get-script-attachments")
@click.argument("title")
@with_client
def get_script_attachments(client: LandscapeClient, title: str) -> None:
    """List the attachment names of a script."""
    for name in client.get_script_attachments(title):
        click.echo(name)


@cli.command("create-script-attachment")
@click.argument("title")
@click.argument("path", type=click.Path(dir_okay=False))
@with_client
def create_script_attachment(client: LandscapeClient, title: str, path: str) -> None:
    """Upload the file at PATH as an attachment of a script."""
    click.echo(client.create_script_attachment(title, path))


@cli.command("remove-script-attachment")
@click.argument("title")
@click.argument("name")
@with_client
def remove_script_attachment(client: LandscapeClient, title: str, name: str) -> None:
    """Remove the attachment NAME from a script."""
    click.echo(client.remove_script_attachment(title, name))


@cli.command("execute-script")
@click.argument("title")
@click.argument("query")
@with_client
def execute_script(client: LandscapeClient, title: str, query: str) -> None:
    """Run a script on the computers matching QUERY."""
    execution = client.execute_script(query, title)
    _echo_json(execution.model_dump(mode="json", by_alias=True))


@cli.command("get-all-hosts")
@with_client
def get_all_hosts(client: LandscapeClient) -> None:
    """Show every registered computer."""
    _echo_json([computer.model_dump(mode="json") for computer in client.get_computers()])


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
