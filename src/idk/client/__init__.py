"""idk API Client - Thin client for backend communication."""

from idk.client.api_client import IdkAPIClient
from idk.client.auth import IdkAuth, LoginError
from idk.client.errors import (
    DecodeError,
    IdkClientError,
    MissingFieldError,
    RemoteStatusError,
    TransportError,
)
from idk.client.models import (
    Command,
    DebugResult,
    ExecutionContext,
    ProjectInitPlan,
    PromptResult,
    RemoteResult,
)

__all__ = [
    "IdkAPIClient",
    "IdkAuth",
    "LoginError",
    "IdkClientError",
    "TransportError",
    "RemoteStatusError",
    "DecodeError",
    "MissingFieldError",
    "Command",
    "DebugResult",
    "ExecutionContext",
    "ProjectInitPlan",
    "PromptResult",
    "RemoteResult",
]
