"""Prompt handling: ask the backend, then act on its answer locally."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from idk.client.api_client import IdkAPIClient
from idk.client.models import PromptResult
from idk.core import config
from idk.core.context import build_execution_context, collect_project, detect_os
from idk.ui.console import IdkConsole

logger = logging.getLogger(__name__)

# Action types the CLI knows how to act on. Anything else is shown as text.
COMMAND_ACTIONS = frozenset({"command", "run_command"})
SCRIPT_ACTIONS = frozenset({"script", "create_script"})
PROJECT_INIT_ACTIONS = frozenset({"project_init", "init_project"})


@dataclass
class CommandOutcome:
    """Result of running a shell command locally."""
    exit_code: int
    output: str


class CommandFailedError(Exception):
    """A shell command exited with a non-zero status."""

    def __init__(self, command: str, outcome: CommandOutcome):
        message = f"exit status {outcome.exit_code}"
        if outcome.output:
            message = f"{message}: {outcome.output}"
        super().__init__(message)
        self.command = command
        self.outcome = outcome


def run_shell(command: str, cwd: Optional[Path] = None) -> CommandOutcome:
    """Run a command through the user's shell and capture its output."""
    result = subprocess.run(
        command,
        shell=True,
        cwd=cwd,
        capture_output=True,
        text=True,
    )
    output = "\n".join(part for part in (result.stdout.strip(), result.stderr.strip()) if part)
    return CommandOutcome(exit_code=result.returncode, output=output)


class PromptHandler:
    """
    Drives one prompt invocation.

    Sends the prompt, then depending on the action type runs the returned
    command (debugging it on failure), shows a script, or walks a project
    setup plan.
    """

    def __init__(
        self,
        client: IdkAPIClient,
        token: str,
        ui: IdkConsole,
        runner: Callable[[str], CommandOutcome] = run_shell,
        os_name: Optional[str] = None,
    ):
        self.client = client
        self.token = token
        self.ui = ui
        self.runner = runner
        self.os_name = os_name or detect_os()

    def handle(
        self,
        prompt: str,
        readme_path: Optional[Path] = None,
        alias: Optional[str] = None,
    ) -> bool:
        """
        Process a prompt end to end.

        Args:
            prompt: Natural-language instruction
            readme_path: Optional readme sent as context
            alias: Name to store the resulting command or script under; a
                script already stored under it is sent for the backend to modify

        Returns:
            True if everything that was attempted succeeded
        """
        existing_script = (config.get_alias(alias) if alias else None) or ""
        context = build_execution_context(prompt, readme_path, existing_script, os_name=self.os_name)

        result = self.client.process_prompt(context, self.token)
        if not result.ok:
            self.ui.print_client_error(result.error)
            return False

        answer: PromptResult = result.value
        logger.debug(f"Prompt answered with action type {answer.action_type!r}")

        action = answer.action_type
        if action in COMMAND_ACTIONS:
            self.ui.print_command(answer.response)
            ok = self.confirm_and_run(answer.response)
        elif action in SCRIPT_ACTIONS:
            self.ui.print_command(answer.response, title="Script")
            ok = True
        elif action in PROJECT_INIT_ACTIONS:
            if answer.response:
                self.ui.print_message(answer.response)
            return self.handle_project_init()
        else:
            self.ui.print_message(answer.response)
            return True

        if alias:
            config.save_alias(alias, answer.response)
            self.ui.print_success(f"Saved as alias '{alias}'")
        return ok

    def confirm_and_run(self, command: str) -> bool:
        """Ask before running ``command``."""
        if not self.ui.confirm("Run this command?", default=True):
            self.ui.print_info("Skipped.")
            return True
        return self.run_command(command)

    def run_command(self, command: str) -> bool:
        """Run ``command``; on failure ask the backend for a fix."""
        outcome = self.runner(command)
        self.ui.print_command_output(command, outcome.output, outcome.exit_code)
        if outcome.exit_code == 0:
            return True

        self.debug_command(command, CommandFailedError(command, outcome))
        return False

    def debug_command(self, command: str, error: BaseException) -> None:
        """Show the backend's remediation for a failed command."""
        result = self.client.process_debug_command(command, self.os_name, error, self.token)
        if not result.ok:
            self.ui.print_client_error(result.error)
            return
        self.ui.print_message(result.value.response, title="Debug")

    def handle_project_init(self, project_path: Optional[Path] = None) -> bool:
        """
        Fetch a setup plan for the project and run it in order.

        Stops at the first failing command.
        """
        snapshot = collect_project(project_path)
        result = self.client.get_project_init(
            snapshot.folder_name,
            snapshot.files,
            snapshot.readme,
            snapshot.makefile,
            self.os_name,
            self.token,
        )
        if not result.ok:
            self.ui.print_client_error(result.error)
            return False

        plan = result.value
        if not plan.commands:
            self.ui.print_info(f"Nothing to set up for this {plan.project_type} project.")
            return True

        self.ui.print_plan(plan.project_type, plan.commands)
        if not self.ui.confirm("Run these commands?", default=True):
            self.ui.print_info("Skipped.")
            return True

        for step in plan.commands:
            self.ui.print_info(step.description)
            if not self.run_command(step.command):
                return False

        self.ui.print_success(f"{plan.project_type} project is set up.")
        return True
