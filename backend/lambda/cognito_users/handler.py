"""Lambda entrypoint for the user administration API.

Runs outside the VPC so it can reach the Cognito public endpoints.
"""

from __future__ import annotations

from typing import Any
from typing import Mapping

from user_admin.api.router import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the user administration router."""

    return _handler(event, context)
