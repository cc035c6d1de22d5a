"""
idk API Client - HTTP client for the idk backend.

Implements the thin-client protocol where:
- CLI: Sends prompt and local context, executes returned commands locally
- Backend: Interprets prompts, returns commands, scripts or setup plans

Every call makes exactly one request and returns a RemoteResult; nothing is
retried or cached.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from idk.client.errors import IdkClientError
from idk.client.models import (
    AuthUrlResponse,
    DebugResult,
    ExecutionContext,
    ProjectInitPlan,
    PromptResult,
    RemoteResult,
    TokenResponse,
)
from idk.client.transport import check_status, decode, post_json, require

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
T = TypeVar("T")


class IdkAPIClient:
    """
    Client for the idk backend.

    Holds only the base URL and an optional httpx transport; the session
    token is passed to each authenticated call.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _call(
        self,
        path: str,
        payload: Dict[str, Any],
        model: Type[ModelT],
        token: Optional[str] = None,
        extract: Optional[Callable[[ModelT], T]] = None,
    ) -> RemoteResult:
        status_code = 0
        try:
            status_code, body = post_json(
                f"{self.base_url}{path}",
                payload,
                token=token,
                transport=self._transport,
            )
            check_status(status_code)
            parsed = decode(body, model)
            value = extract(parsed) if extract else parsed
        except IdkClientError as e:
            logger.debug(f"{path} failed ({status_code}): {e}")
            return RemoteResult(error=e, status_code=status_code)
        return RemoteResult(value=value, status_code=status_code)

    # ==========================================
    # LOGIN
    # ==========================================

    def get_authorization_url(self, state: str) -> RemoteResult[str]:
        """
        Ask the backend for a Google consent URL bound to ``state``.

        Returns:
            RemoteResult with the URL; MissingFieldError if it is empty
        """
        return self._call(
            "/googleAuthUrl",
            {"state": state},
            AuthUrlResponse,
            extract=lambda r: require(r.url, "url"),
        )

    def exchange_code_for_token(self, google_auth_code: str) -> RemoteResult[str]:
        """
        Trade a Google authorization code for a session token.

        Returns:
            RemoteResult with the token; MissingFieldError if it is empty
        """
        return self._call(
            "/token",
            {"googleAuthCode": google_auth_code},
            TokenResponse,
            extract=lambda r: require(r.jwt_token, "jwtToken"),
        )

    # ==========================================
    # AUTHENTICATED OPERATIONS
    # ==========================================

    def process_prompt(
        self,
        context: ExecutionContext,
        token: str,
    ) -> RemoteResult[PromptResult]:
        """
        Send a prompt with its execution context.

        Args:
            context: Prompt, OS, working directory, readme and existing script
            token: Session token

        Returns:
            RemoteResult with response text and action type
        """
        return self._call("/prompt", context.to_dict(), PromptResult, token=token)

    def process_debug_command(
        self,
        command: str,
        os: str,
        cause_error: BaseException,
        token: str,
    ) -> RemoteResult[DebugResult]:
        """Ask the backend how to fix a command that failed with ``cause_error``."""
        payload = {
            "command": command,
            "os": os,
            "error": str(cause_error),
        }
        return self._call("/debug/command", payload, DebugResult, token=token)

    def get_project_init(
        self,
        project_folder_name: str,
        files: List[str],
        readme_data: str,
        makefile_data: str,
        os: str,
        token: str,
    ) -> RemoteResult[ProjectInitPlan]:
        """
        Ask the backend how to set up the project in the current folder.

        Args:
            project_folder_name: Name of the project directory
            files: Top-level file names
            readme_data: README contents (may be empty)
            makefile_data: Makefile contents (may be empty)
            os: Operating system identifier
            token: Session token

        Returns:
            RemoteResult with the project type and ordered setup commands
        """
        payload = {
            "files": files,
            "readme": readme_data,
            "makefile": makefile_data,
            "os": os,
            "projectFolderName": project_folder_name,
        }
        return self._call("/run/init", payload, ProjectInitPlan, token=token)
