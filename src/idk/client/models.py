"""Typed request context and response records exchanged with the backend."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from idk.client.errors import IdkClientError

T = TypeVar("T")


class _WireModel(BaseModel):
    """Validates only the backend's wire keys (camelCase), never field names."""
    model_config = ConfigDict(populate_by_name=False)


class AuthUrlResponse(_WireModel):
    """Body of ``/googleAuthUrl``. Emptiness is checked by the caller."""
    url: Optional[StrictStr] = None


class TokenResponse(_WireModel):
    """Body of ``/token``. Emptiness is checked by the caller."""
    jwt_token: Optional[StrictStr] = Field(default=None, alias="jwtToken")


class PromptResult(_WireModel):
    """Backend answer to a prompt.

    ``action_type`` tells the CLI what to do with ``response`` (run it as a
    command, show it as a script, start project setup, ...). Values are not
    validated here.
    """
    response: StrictStr
    action_type: StrictStr = Field(alias="actionType")


class DebugResult(_WireModel):
    """Remediation text for a failed command."""
    response: StrictStr


class Command(_WireModel):
    """One step of a project setup plan."""
    command: StrictStr
    description: StrictStr


class ProjectInitPlan(_WireModel):
    """Ordered setup plan for a detected project type."""
    project_type: StrictStr = Field(alias="projectType")
    commands: List[Command]


@dataclass
class ExecutionContext:
    """Local context sent along with a prompt.

    Every field is always sent, even when empty.
    """
    prompt: str
    os: str
    pwd: str
    readme_data: str = ""
    existing_script: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt": self.prompt,
            "os": self.os,
            "existingScript": self.existing_script,
            "readmeData": self.readme_data,
            "pwd": self.pwd,
        }


@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    """Outcome of one backend call.

    Holds either ``value`` or ``error``, never both. ``status_code`` is the
    HTTP status actually observed, or 0 when no response was received.
    """
    value: Optional[T] = None
    error: Optional[IdkClientError] = None
    status_code: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
