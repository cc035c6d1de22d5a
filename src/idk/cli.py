"""
idk CLI - ask your terminal in plain English.

The CLI handles local operations (context collection, running commands)
while the backend interprets prompts.

Usage:
    idk --login                          # Sign in with Google
    idk list files changed this week     # Run a prompt
    idk --readme README.md start the app # Prompt with readme context
    idk --alias deploy deploy to staging # Save the result as an alias
    idk --logout
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.logging import RichHandler

from idk import __version__
from idk.client import IdkAPIClient, IdkAuth, IdkClientError, LoginError
from idk.core import config
from idk.core.prompt import PromptHandler
from idk.ui import IdkConsole


def setup_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def do_login(auth: IdkAuth, ui: IdkConsole) -> None:
    try:
        auth.login()
    except TimeoutError:
        ui.print_error("Authentication timed out. Please try again!", recoverable=False)
        sys.exit(1)
    except (IdkClientError, LoginError, OSError) as e:
        ui.print_error("Failed to Sign In With Google. Please try again!", recoverable=False)
        if ui.verbose:
            ui.print_info(f"{type(e).__name__}: {e}")
        sys.exit(1)

    ui.print_success("Login Successful")
    ui.console.print("Try: [cyan]idk <your prompt>[/]")
    ui.console.print("Learn more: [cyan]idk -h[/]")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("prompt", nargs=-1)
@click.option("--login", is_flag=True, help="Login to idk cli")
@click.option("--logout", is_flag=True, help="Logout from idk cli")
@click.option(
    "--readme",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path of your script's readme file to use with prompt",
)
@click.option("--alias", help="Set alias for your terminal commands or scripts")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.version_option(version=__version__, prog_name="idk")
def cli(
    prompt: Tuple[str, ...],
    login: bool,
    logout: bool,
    readme: Optional[Path],
    alias: Optional[str],
    verbose: bool,
):
    """
    idk - prompt in plain English to run terminal commands or scripts.

    Quick start:
        idk --login
        idk find the largest files in this folder
    """
    setup_logging(verbose)
    ui = IdkConsole(verbose=verbose)

    try:
        base_url = config.get_api_base_url()
    except json.JSONDecodeError as e:
        ui.print_error(
            f"Cannot read config file {config.get_config_path()} ({e}). Fix or delete it and try again.",
            recoverable=False,
        )
        sys.exit(1)
    client = IdkAPIClient(base_url)
    auth = IdkAuth(client, ui=ui)

    if login:
        do_login(auth, ui)
        return

    if logout:
        auth.logout()
        ui.print_success("Logout Successful")
        return

    text = " ".join(prompt).strip()
    if not text:
        click.echo(click.get_current_context().get_help())
        return

    token = auth.get_token()
    if not token:
        ui.print_error("You are not logged in. Please login first", recoverable=False)
        ui.console.print("Command: [cyan]idk --login[/]")
        sys.exit(1)

    handler = PromptHandler(client, token, ui)
    if not handler.handle(text, readme_path=readme, alias=alias):
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
