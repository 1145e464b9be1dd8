"""Profile claim extraction and the elevated-profile gate.

SECURITY NOTE: The bearer token is NOT verified here. The payload segment
is decoded and the ``profile`` claim read as-is; anyone able to craft the
middle segment controls the result. This is only acceptable because the
API Gateway authorizer in front of this Lambda authenticates the token
before the request arrives.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any
from typing import Mapping

from user_admin.exceptions import BadRequestError
from user_admin.exceptions import ClaimError
from user_admin.exceptions import UnauthorizedError
from user_admin.utils.logging import get_logger

logger = get_logger(__name__)

_BASE64URL_RAW = re.compile(r"^[A-Za-z0-9_-]*$")


def get_header(headers: Mapping[str, Any], name: str) -> str:
    """Get a header value case-insensitively, preferring an exact key."""
    if name in headers:
        value = headers[name]
        return str(value) if value is not None else ""
    for key, value in headers.items():
        if key.lower() == name.lower():
            return str(value) if value is not None else ""
    return ""


def _decode_segment(segment: str) -> bytes:
    """Decode an unpadded base64url segment.

    Raises:
        ClaimError: If the segment is padded, contains characters outside
            the URL-safe alphabet, or has an impossible length.
    """
    if not _BASE64URL_RAW.match(segment):
        raise ClaimError("unable to decode token body")
    padding = -len(segment) % 4
    try:
        return base64.urlsafe_b64decode(segment + "=" * padding)
    except (binascii.Error, ValueError) as exc:
        raise ClaimError("unable to decode token body") from exc


def extract_profile(headers: Mapping[str, Any]) -> str:
    """Read the ``profile`` claim from the Authorization header token.

    Args:
        headers: Request headers.

    Returns:
        The profile claim value.

    Raises:
        ClaimError: If the token is absent, malformed, or carries no
            string ``profile`` claim.
    """
    token = get_header(headers, "Authorization")
    if not token:
        raise ClaimError("authorization token not present")

    parts = token.split(".")
    if len(parts) < 2:
        raise ClaimError("invalid auth token")

    payload = _decode_segment(parts[1])

    try:
        claims = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ClaimError("unable to unmarshal token body") from exc
    if not isinstance(claims, dict):
        raise ClaimError("unable to unmarshal token body")

    if "profile" not in claims or claims["profile"] == "":
        raise ClaimError("profile attribute not present")
    profile = claims["profile"]
    if not isinstance(profile, str):
        raise ClaimError("profile attribute type not string")
    return profile


def require_elevated(headers: Mapping[str, Any], elevated_profile: str) -> None:
    """Ensure the caller's profile claim equals *elevated_profile*.

    Raises:
        BadRequestError: If the claim cannot be read. The underlying reason
            is logged, not returned.
        UnauthorizedError: If the claim names a different profile.
    """
    try:
        profile = extract_profile(headers)
    except ClaimError as exc:
        logger.error(f"Profile claim rejected: {exc.reason}")
        raise BadRequestError() from exc

    if profile != elevated_profile:
        logger.warning("Caller lacks elevated profile", extra={"profile": profile})
        raise UnauthorizedError()
