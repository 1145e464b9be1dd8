"""Shared response utilities for the API Gateway proxy integration."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any
from typing import Optional

from pydantic import BaseModel

from user_admin.exceptions import InternalServerError
from user_admin.exceptions import status_code_for

_COMPACT = (",", ":")


def get_cors_headers() -> dict[str, str]:
    """Get CORS headers for the response.

    The API is served to any origin; every response carries the same set.
    """
    return {
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET,PUT,DELETE,OPTIONS",
    }


def gateway_response(
    body: str = "",
    error: Optional[BaseException] = None,
) -> dict[str, Any]:
    """Create an API Gateway proxy response.

    Args:
        body: Response text. On success it is returned verbatim and is
            expected to be serialized JSON or empty. On error a non-empty
            body is wrapped as ``{"message": body}``.
        error: Error category, or None for a successful response.

    Returns:
        API Gateway response dictionary.
    """
    response: dict[str, Any] = {"headers": get_cors_headers()}

    if error is not None:
        response["statusCode"] = status_code_for(error)
        response["body"] = (
            json.dumps({"message": body}, separators=_COMPACT) if body else ""
        )
        return response

    response["statusCode"] = 200
    response["body"] = body
    return response


def json_response(payload: Any) -> dict[str, Any]:
    """Serialize *payload* and wrap it in a successful response.

    Args:
        payload: A Pydantic model, dataclass, or JSON-compatible value.

    Raises:
        InternalServerError: If the payload cannot be serialized.
    """
    try:
        text = json.dumps(_serialize_body(payload), separators=_COMPACT)
    except (TypeError, ValueError) as exc:
        raise InternalServerError("") from exc
    return gateway_response(text)


def _serialize_body(body: Any) -> Any:
    """Convert a response body to a JSON-compatible value."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True)

    if hasattr(body, "__dataclass_fields__"):
        return asdict(body)

    return body
