"""Shared boto3 client factory with caching."""

from __future__ import annotations

from typing import Any

import boto3
import botocore.config

_CLIENT_CACHE: dict[tuple[str, str | None], Any] = {}

# Cognito calls run inside an API Gateway request; keep them short.
_COGNITO_CONFIG = botocore.config.Config(
    connect_timeout=5,
    read_timeout=10,
    retries={"max_attempts": 2},
)


def get_client(
    service: str,
    region_name: str | None = None,
    config: botocore.config.Config | None = None,
) -> Any:
    """Return a cached boto3 client for the given service."""
    cache_key = (service, region_name)
    if cache_key in _CLIENT_CACHE:
        return _CLIENT_CACHE[cache_key]
    client = boto3.client(  # type: ignore[call-overload]
        service,
        region_name=region_name,
        config=config,
    )
    _CLIENT_CACHE[cache_key] = client
    return client


def clear_client_cache() -> None:
    """Clear cached boto3 clients (useful in tests)."""
    _CLIENT_CACHE.clear()


def get_cognito_idp_client(region_name: str | None = None) -> Any:
    return get_client("cognito-idp", region_name=region_name, config=_COGNITO_CONFIG)
