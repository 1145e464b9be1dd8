"""Pytest configuration and fixtures for backend tests.

Provides API Gateway events, bearer tokens carrying a profile claim,
and a mocked Cognito IDP client.
"""

from __future__ import annotations

import base64
import json
import sys
from pathlib import Path
from typing import Any
from typing import Optional
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

ELEVATED = 'ELEVATED'


# --- Helpers ---


def b64url(data: bytes) -> str:
    """Encode bytes as unpadded base64url."""
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def make_token(claims: Any) -> str:
    """Build an unsigned three-segment token with *claims* as its payload."""
    header = b64url(b'{"alg":"none","typ":"JWT"}')
    payload = b64url(json.dumps(claims).encode('utf-8'))
    return f'{header}.{payload}.signature'


def client_error(code: str, operation: str = 'AdminEnableUser') -> ClientError:
    """Build a botocore ClientError with the given Cognito error code."""
    return ClientError(
        {'Error': {'Code': code, 'Message': f'{code} raised'}},
        operation,
    )


def make_event(
    method: str,
    path: str,
    *,
    headers: Optional[dict] = None,
    query: Optional[dict] = None,
    body: Any = None,
) -> dict:
    """Build an API Gateway REST proxy event."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        'httpMethod': method,
        'path': path,
        'headers': headers,
        'queryStringParameters': query,
        'requestContext': {'requestId': str(uuid4())},
        'body': body,
        'isBase64Encoded': False,
    }


def cognito_user(
    username: str,
    status: str,
    *,
    enabled: Optional[bool] = True,
    sub: Optional[str] = None,
) -> dict:
    """Build a ListUsers entry."""
    user: dict[str, Any] = {
        'Username': username,
        'UserStatus': status,
        'Attributes': [
            {'Name': 'sub', 'Value': sub or f'{username}-sub'},
            {'Name': 'email', 'Value': f'{username}@example.com'},
            {'Name': 'email_verified', 'Value': 'true'},
        ],
    }
    if enabled is not None:
        user['Enabled'] = enabled
    return user


# --- Fixtures ---


@pytest.fixture
def elevated_headers() -> dict:
    return {'Authorization': make_token({'profile': ELEVATED})}


@pytest.fixture
def settings():
    from user_admin.config import Settings

    return Settings(user_pool_id='ap-south-1_TestPool', elevated_profile=ELEVATED)


@pytest.fixture
def cognito_client(mocker):
    """Mocked cognito-idp client; every call succeeds unless configured."""
    client = mocker.MagicMock(name='cognito-idp')
    client.list_users.return_value = {'Users': []}
    return client


@pytest.fixture
def directory_context(settings, cognito_client):
    from user_admin.config import build_context

    return build_context(settings, client=cognito_client)
