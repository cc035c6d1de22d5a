"""Single-shot JSON POST and response decoding helpers."""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from idk.client.errors import (
    DecodeError,
    MissingFieldError,
    RemoteStatusError,
    TransportError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def post_json(
    url: str,
    body: Any,
    token: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Tuple[int, bytes]:
    """
    POST ``body`` as JSON and return the raw status code and body.

    Args:
        url: Absolute endpoint URL
        body: JSON-serializable request body
        token: Session token, sent verbatim as the Authorization header
        transport: Optional httpx transport (tests pass a MockTransport)

    Returns:
        (status_code, raw body bytes)

    Raises:
        TransportError: body not serializable, connection failed, or the
            response could not be read
    """
    headers = {"Content-Type": "application/json"}
    if token is not None:
        headers["Authorization"] = token

    try:
        content = json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise TransportError(f"cannot serialize request body: {e}") from e

    logger.debug(f"POST {url} ({len(content)} bytes, auth={'yes' if token is not None else 'no'})")

    # No timeout: a hung backend hangs the call.
    try:
        with httpx.Client(transport=transport, timeout=None) as client:
            response = client.post(url, content=content, headers=headers)
    except httpx.HTTPError as e:
        raise TransportError(f"request to {url} failed: {e}") from e

    logger.debug(f"POST {url} -> {response.status_code}")
    return response.status_code, response.content


def check_status(status_code: int) -> None:
    """Raise RemoteStatusError for anything but 200."""
    if status_code != httpx.codes.OK:
        raise RemoteStatusError(status_code)


def decode(body: bytes, model: Type[ModelT]) -> ModelT:
    """Parse ``body`` into ``model``, raising DecodeError on any mismatch."""
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"invalid {model.__name__} payload: {e}") from e


def require(value: Optional[str], field: str) -> str:
    """Treat a null or empty string as a missing field."""
    if not value:
        raise MissingFieldError(field)
    return value
