"""Tests for API Gateway response helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from user_admin.api.schemas import UserListResponse
from user_admin.exceptions import (
    BadRequestError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
)
from user_admin.utils.responses import gateway_response, get_cors_headers, json_response

CORS = {
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET,PUT,DELETE,OPTIONS',
}


class TestGatewayResponse:
    """Tests for gateway_response."""

    def test_success_returns_body_verbatim(self) -> None:
        response = gateway_response('ok')
        assert response['statusCode'] == 200
        assert response['body'] == 'ok'

    def test_error_wraps_message(self) -> None:
        response = gateway_response('x', UnauthorizedError())
        assert response['statusCode'] == 401
        assert response['body'] == '{"message":"x"}'

    def test_error_without_body_is_empty(self) -> None:
        response = gateway_response('', InternalServerError())
        assert response['statusCode'] == 500
        assert response['body'] == ''

    @pytest.mark.parametrize(
        ('error', 'status'),
        [(BadRequestError(), 400), (NotFoundError(), 404), (ValueError(), 500)],
    )
    def test_status_follows_error(self, error: Exception, status: int) -> None:
        assert gateway_response('m', error)['statusCode'] == status

    def test_cors_headers_always_attached(self) -> None:
        assert gateway_response('ok')['headers'] == CORS
        assert gateway_response('', NotFoundError())['headers'] == CORS
        assert get_cors_headers() == CORS

    def test_headers_are_not_shared(self) -> None:
        first = gateway_response('a')
        first['headers']['X-Extra'] = '1'
        assert 'X-Extra' not in gateway_response('b')['headers']


class TestJsonResponse:
    """Tests for json_response."""

    def test_serializes_model_with_aliases(self) -> None:
        model = UserListResponse.from_records([{'username': 'alice', 'isEnabled': True}])
        response = json_response(model)
        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {
            'users': [{'username': 'alice', 'isEnabled': True}],
            'totalItemCount': 1,
        }

    def test_serializes_dataclass(self) -> None:
        @dataclass
        class Payload:
            name: str

        response = json_response(Payload(name='alice'))
        assert json.loads(response['body']) == {'name': 'alice'}

    def test_serializes_plain_dict(self) -> None:
        response = json_response({'userId': 'abc'})
        assert response['body'] == '{"userId":"abc"}'

    def test_unserializable_payload_raises_internal_error(self) -> None:
        with pytest.raises(InternalServerError) as exc_info:
            json_response({'value': object()})
        assert exc_info.value.message == ''
