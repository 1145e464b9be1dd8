"""Caller authorization helpers."""

from user_admin.auth.claims import (
    extract_profile,
    get_header,
    require_elevated,
)

__all__ = [
    "extract_profile",
    "get_header",
    "require_elevated",
]
