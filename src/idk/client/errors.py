"""Error taxonomy for backend calls."""
from __future__ import annotations


class IdkClientError(Exception):
    """Base class for every failure surfaced by the backend client."""


class TransportError(IdkClientError):
    """Request could not be serialized, sent, or its response read."""


class RemoteStatusError(IdkClientError):
    """Backend answered with a status other than 200."""

    def __init__(self, status_code: int):
        super().__init__(f"server returned non-OK status: {status_code}")
        self.status_code = status_code


class DecodeError(IdkClientError):
    """Response body is not valid JSON for the expected shape."""


class MissingFieldError(IdkClientError):
    """A required value is absent, null, or empty."""

    def __init__(self, field: str):
        super().__init__(f"{field} not found")
        self.field = field
