"""Runtime configuration for the user administration Lambda.

Settings are read from the environment once per process. The Cognito
client and the user pool id are bundled into a ``DirectoryContext`` that
is handed to every directory operation instead of living in module
globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any
from typing import Optional

from user_admin.services.aws_clients import get_cognito_idp_client

DEFAULT_REGION = "ap-south-1"
DEFAULT_ELEVATED_PROFILE = "SUPER_ADMIN"


@dataclass(frozen=True)
class Settings:
    """Environment-derived settings.

    Attributes:
        user_pool_id: Cognito user pool the API administers.
        region: AWS region of the user pool.
        elevated_profile: Profile claim value required on privileged routes.
    """

    user_pool_id: str
    region: str = DEFAULT_REGION
    elevated_profile: str = DEFAULT_ELEVATED_PROFILE

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        A missing pool id is not rejected here; Cognito reports it on the
        first directory call.
        """
        return cls(
            user_pool_id=os.getenv("COGNITO_USER_POOL_ID", ""),
            region=os.getenv("AWS_REGION") or DEFAULT_REGION,
            elevated_profile=os.getenv("ELEVATED_PROFILE") or DEFAULT_ELEVATED_PROFILE,
        )


@dataclass(frozen=True)
class DirectoryContext:
    """Cognito client handle plus the user pool it operates on."""

    client: Any
    user_pool_id: str


def build_context(
    settings: Settings,
    client: Optional[Any] = None,
) -> DirectoryContext:
    """Build the directory context for *settings*.

    Args:
        settings: Loaded settings.
        client: Optional pre-built Cognito client (used by tests).
    """
    if client is None:
        client = get_cognito_idp_client(settings.region)
    return DirectoryContext(client=client, user_pool_id=settings.user_pool_id)
