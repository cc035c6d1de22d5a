"""
idk Authentication - Google sign-in and token management.

Login runs the authorization-code handoff:
1. Ask the backend for a consent URL bound to a fresh state
2. Open the browser and wait for the local callback carrying the code
3. Exchange the code for a session token and store it
"""
from __future__ import annotations

import html
import logging
import secrets
import time
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import TYPE_CHECKING, Callable, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from idk.client.api_client import IdkAPIClient
from idk.core import config

if TYPE_CHECKING:
    from idk.ui.console import IdkConsole

logger = logging.getLogger(__name__)

CALLBACK_PORT = 54321
CALLBACK_PATH = "/callback"
LOGIN_TIMEOUT = 300

_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>idk - {title}</title>
    <style>
        body {{ font-family: -apple-system, sans-serif; text-align: center; padding-top: 50px; }}
        h1 {{ color: {color}; }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <p>{message}</p>
</body>
</html>
"""


class LoginError(Exception):
    """The OAuth callback reported an error."""


class _CallbackServer:
    """Local HTTP server that receives the OAuth redirect."""

    def __init__(self, address: Tuple[str, int], state: str):
        self.state = state
        self.code: Optional[str] = None
        self.error: Optional[str] = None
        self.server = HTTPServer(address, self._make_handler())
        self.server.timeout = 1  # Lets wait_for_code check its deadline

    @property
    def port(self) -> int:
        return self.server.server_address[1]

    def _make_handler(self):
        parent = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self):
                parsed = urlparse(self.path)
                if parsed.path != CALLBACK_PATH:
                    self.send_response(404)
                    self.end_headers()
                    return

                query = parse_qs(parsed.query)
                state = query.get("state", [None])[0]
                code = query.get("code", [None])[0]

                if state != parent.state:
                    # Stale or forged redirect, keep waiting for the real one
                    logger.warning("Ignoring OAuth callback with mismatched state")
                    self._respond(400, "Login Failed", "Invalid login state.", "#ff4444")
                elif "error" in query:
                    parent.error = query["error"][0]
                    self._respond(400, "Login Failed", parent.error, "#ff4444")
                elif code:
                    parent.code = code
                    self._respond(
                        200,
                        "Login Successful",
                        "You can close this window and return to the terminal.",
                        "#10B981",
                    )
                else:
                    parent.error = "No authorization code received"
                    self._respond(400, "Login Failed", parent.error, "#ff4444")

            def _respond(self, status: int, title: str, message: str, color: str):
                self.send_response(status)
                self.send_header("Content-Type", "text/html")
                self.end_headers()
                page = _PAGE.format(title=title, message=html.escape(message), color=color)
                self.wfile.write(page.encode())

            def log_message(self, *args):
                pass  # Suppress HTTP logs

        return Handler

    def wait_for_code(self, timeout: float = LOGIN_TIMEOUT) -> str:
        """Serve requests until a code arrives, an error is reported, or time runs out."""
        deadline = time.monotonic() + timeout
        while self.code is None and self.error is None:
            if time.monotonic() >= deadline:
                raise TimeoutError("Authentication timed out. Please try again.")
            self.server.handle_request()

        if self.error is not None:
            raise LoginError(self.error)
        return self.code

    def close(self):
        self.server.server_close()


class IdkAuth:
    """
    Handles CLI authentication via Google OAuth in the browser.

    The session token is stored in the idk config file.
    """

    def __init__(
        self,
        client: IdkAPIClient,
        ui: Optional[IdkConsole] = None,
        callback_port: int = CALLBACK_PORT,
    ):
        self.client = client
        self.ui = ui
        self.callback_port = callback_port

    def login(
        self,
        open_browser: Callable[[str], object] = webbrowser.open,
        timeout: float = LOGIN_TIMEOUT,
    ) -> str:
        """
        Run the browser sign-in and store the resulting token.

        Returns:
            The session token

        Raises:
            IdkClientError: a backend call failed
            LoginError: the callback reported an error
            TimeoutError: no callback within ``timeout`` seconds
            OSError: the local callback port could not be opened
        """
        state = secrets.token_urlsafe(16)
        server = _CallbackServer(("localhost", self.callback_port), state)
        try:
            auth_url = self.client.get_authorization_url(state).unwrap()

            if self.ui:
                self.ui.print_info("Opening browser for Google sign-in...")
                self.ui.console.print(f"If the browser doesn't open, visit:\n{auth_url}", markup=False)
            open_browser(auth_url)

            code = server.wait_for_code(timeout)
            logger.debug("Received authorization code, exchanging for token")
            token = self.client.exchange_code_for_token(code).unwrap()
        finally:
            server.close()

        config.save_token(token)
        return token

    def logout(self) -> None:
        """Forget the stored session token."""
        config.clear_token()

    def get_token(self) -> Optional[str]:
        return config.get_token()

    def is_authenticated(self) -> bool:
        """Check if a session token is stored."""
        return bool(self.get_token())
