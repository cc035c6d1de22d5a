"""Rich console UI for idk CLI."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.syntax import Syntax
from rich.table import Table

from idk.client.errors import (
    DecodeError,
    IdkClientError,
    MissingFieldError,
    RemoteStatusError,
    TransportError,
)
from idk.client.models import Command


class IdkConsole:
    """Rich console for idk CLI."""

    def __init__(self, verbose: bool = False, console: Optional[Console] = None):
        self.console = console or Console()
        self.verbose = verbose

    def print_message(self, message: str, title: str = "Response"):
        """Print a markdown response in a panel."""
        md = Markdown(message)
        self.console.print(Panel(md, title=f"[bold green]{title}[/]", border_style="green"))

    def print_command(self, command: str, title: str = "Command"):
        """Print a shell command or script with syntax highlighting."""
        syntax = Syntax(command, "bash", theme="monokai", line_numbers=False, word_wrap=True)
        self.console.print(Panel(syntax, title=f"[bold cyan]{title}[/]", border_style="cyan"))

    def print_error(self, error: str, recoverable: bool = True):
        """Print an error message."""
        style = "yellow" if recoverable else "red"
        icon = "⚠" if recoverable else "✗"
        self.console.print(f"[{style}]{icon} {escape(error)}[/{style}]")

    def print_success(self, message: str):
        """Print a success message."""
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_info(self, message: str):
        """Print an info message."""
        self.console.print(f"[blue]ℹ {escape(message)}[/blue]")

    def print_warning(self, message: str):
        """Print a warning message."""
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def print_command_output(self, command: str, output: str, exit_code: int):
        """Print command execution output."""
        self.console.print(f"\n[bold]$ {escape(command)}[/bold]")
        if output:
            self.console.print(output, markup=False)
        if exit_code != 0:
            self.console.print(f"[yellow]Exit code: {exit_code}[/yellow]")

    def print_plan(self, project_type: str, commands: List[Command]):
        """Print a project setup plan as a numbered table."""
        table = Table(title=f"[bold]Setup plan for {escape(project_type)} project[/]", show_lines=False)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Command", style="bold cyan")
        table.add_column("Description")
        for i, step in enumerate(commands, 1):
            table.add_row(str(i), escape(step.command), escape(step.description))
        self.console.print(table)

    def confirm(self, message: str, default: bool = True) -> bool:
        """Ask for confirmation."""
        return Confirm.ask(message, console=self.console, default=default)

    def print_client_error(self, error: IdkClientError):
        """Explain a failed backend call."""
        if isinstance(error, RemoteStatusError) and error.status_code in (401, 403):
            self.print_error("Your session has expired. Please login again: `idk --login`", recoverable=False)
        elif isinstance(error, RemoteStatusError):
            self.print_error(f"Server error: {error.status_code}. Please try again!")
        elif isinstance(error, TransportError):
            self.print_error("Cannot reach idk server. Check your internet connection.", recoverable=False)
        elif isinstance(error, (DecodeError, MissingFieldError)):
            self.print_error("Unexpected response from idk server. Please try again!")
        else:
            self.print_error(str(error), recoverable=False)

        if self.verbose:
            self.console.print(f"[dim]{type(error).__name__}: {escape(str(error))}[/dim]", highlight=False)
