from __future__ import annotations

import io
import json
from typing import Callable, Dict, List

import httpx
from rich.console import Console

from idk.client import IdkAPIClient
from idk.ui import IdkConsole

BASE_URL = "https://idk.test"


class Backend:
    """Routes mock requests by path and records what was sent."""

    def __init__(self, routes: Dict[str, Callable[[httpx.Request], httpx.Response]]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404)
        return handler(request)

    def bodies(self, path: str) -> List[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path == path]

    def client(self) -> IdkAPIClient:
        return IdkAPIClient(BASE_URL, transport=httpx.MockTransport(self))


def reply(status: int = 200, **payload) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, json=payload)


def raw(status: int, content: bytes) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, content=content)


class ScriptedConsole(IdkConsole):
    """Console writing to a buffer and answering confirmations from a list."""

    def __init__(self, answers=None, verbose: bool = False):
        self.buffer = io.StringIO()
        super().__init__(
            verbose=verbose,
            console=Console(file=self.buffer, force_terminal=False, width=200),
        )
        self.answers = list(answers or [])
        self.questions: List[str] = []

    def confirm(self, message: str, default: bool = True) -> bool:
        self.questions.append(message)
        return self.answers.pop(0) if self.answers else default

    @property
    def output(self) -> str:
        return self.buffer.getvalue()
