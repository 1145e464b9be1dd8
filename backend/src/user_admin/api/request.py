"""Request parsing helpers for the API Gateway proxy event."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Mapping
from typing import Optional

from user_admin.exceptions import BadRequestError


@dataclass(frozen=True)
class GatewayRequest:
    """The parts of a proxy event the router and handlers read."""

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    body: str = ""
    request_id: str = ""

    @property
    def route_key(self) -> str:
        return f"{self.method} {self.path}"

    def query_param(self, name: str) -> Optional[str]:
        return self.query.get(name)

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "GatewayRequest":
        """Build a request from an API Gateway REST proxy event.

        Raises:
            BadRequestError: If a base64-encoded body is not valid base64
                or does not decode to UTF-8 text.
        """
        body = event.get("body") or ""
        if body and event.get("isBase64Encoded"):
            try:
                body = base64.b64decode(body).decode("utf-8")
            except (binascii.Error, ValueError) as exc:
                raise BadRequestError("invalid request body") from exc

        return cls(
            method=event.get("httpMethod") or "",
            path=event.get("path") or "",
            headers=dict(event.get("headers") or {}),
            query=dict(event.get("queryStringParameters") or {}),
            body=body,
            request_id=(event.get("requestContext") or {}).get("requestId", ""),
        )
