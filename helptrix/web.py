"""Framework-neutral request and response objects used by the controllers."""

from __future__ import annotations

import json as _json
from dataclasses import dataclass, field
from typing import Any

from helptrix.models import AuthPayload

__all__ = ["UploadedFile", "Request", "Response", "BadRequestBody", "error_response"]


class BadRequestBody(ValueError):
    """The request body is missing or is not valid JSON."""


@dataclass(frozen=True)
class UploadedFile:
    """A file received in a multipart form."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Request:
    """An authenticated HTTP request as seen by a controller."""

    payload: AuthPayload
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: bytes | str | None = None
    files: dict[str, UploadedFile] = field(default_factory=dict)

    def json(self) -> Any:
        """Decode the body as JSON, raising BadRequestBody when that fails."""
        raw = self.body
        if raw is None or len(raw) == 0:
            raise BadRequestBody("request body is empty")
        try:
            text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            return _json.loads(text)
        except (UnicodeDecodeError, _json.JSONDecodeError) as exc:
            raise BadRequestBody(f"invalid JSON body: {exc}") from exc


@dataclass
class Response:
    """Status code and JSON-ready body of a reply; body is None for no content."""

    status: int
    body: Any = None


def error_response(status: int, message: str) -> Response:
    """Build the standard error reply: a JSON object with an ``error`` key."""
    return Response(int(status), {"error": message})