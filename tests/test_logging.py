"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys

from user_admin.utils.logging import (
    StructuredLogFormatter,
    clear_request_context,
    get_logger,
    log_response,
    mask_email,
    set_request_context,
)


def _record(level: int = logging.INFO, msg: str = 'hello', **attrs) -> logging.LogRecord:
    record = logging.LogRecord('user_admin.test', level, __file__, 10, msg, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestMaskEmail:
    """Tests for mask_email."""

    def test_masks_regular_email(self) -> None:
        assert mask_email('john.doe@example.com') == 'jo***@***.com'

    def test_masks_short_local_part(self) -> None:
        assert mask_email('a@b.co') == 'a***@***.co'

    def test_invalid_email(self) -> None:
        assert mask_email('not-an-email') == '***'
        assert mask_email('') == '***'


class TestStructuredLogFormatter:
    """Tests for StructuredLogFormatter."""

    def teardown_method(self) -> None:
        clear_request_context()

    def test_formats_json(self) -> None:
        data = json.loads(StructuredLogFormatter().format(_record()))
        assert data['level'] == 'INFO'
        assert data['logger'] == 'user_admin.test'
        assert data['message'] == 'hello'
        assert 'request_id' not in data

    def test_includes_request_id(self) -> None:
        set_request_context(req_id='req-123')
        data = json.loads(StructuredLogFormatter().format(_record()))
        assert data['request_id'] == 'req-123'

    def test_includes_context(self) -> None:
        data = json.loads(
            StructuredLogFormatter().format(_record(context={'username': 'alice'}))
        )
        assert data['context'] == {'username': 'alice'}

    def test_includes_exception(self) -> None:
        try:
            raise ValueError('bad value')
        except ValueError:
            record = _record(logging.ERROR, exc_info=sys.exc_info())
        data = json.loads(StructuredLogFormatter().format(record))
        assert data['exception']['type'] == 'ValueError'
        assert data['exception']['message'] == 'bad value'
        assert data['source']['line'] == 10


class TestContextLogger:
    """Tests for the logger adapter and log_response."""

    def test_merges_adapter_and_call_extras(self, mocker) -> None:
        logger = get_logger('user_admin.test', component='router')
        handle = mocker.patch.object(logger.logger, 'handle')
        logger.logger.setLevel(logging.INFO)

        logger.info('routed', extra={'status': 200})

        record = handle.call_args.args[0]
        assert record.context == {'component': 'router', 'status': 200}

    def test_log_response_levels(self, mocker) -> None:
        logger = get_logger('user_admin.test')
        log = mocker.patch.object(logger, 'log')

        log_response(logger, 200, 12.3456)
        log_response(logger, 404)

        assert log.call_args_list[0].args == (logging.INFO, 'Lambda response')
        assert log.call_args_list[0].kwargs['extra'] == {
            'status_code': 200,
            'duration_ms': 12.35,
        }
        assert log.call_args_list[1].args == (logging.WARNING, 'Lambda response')
