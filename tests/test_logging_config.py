"""Tests for log masking."""

import logging

import pytest

from common.logging_config import SensitiveDataFilter, get_logger


def filtered(message, *args):
    record = logging.LogRecord('test', logging.INFO, __file__, 1, message, args, None)
    SensitiveDataFilter().filter(record)
    return record.getMessage()


@pytest.mark.parametrize("message,secret", [
    ("GET /admin/keys?token=s3cret&page=2", "s3cret"),
    ("admin_token: s3cret", "s3cret"),
    ("Set-Cookie premium_session=abcdef123", "abcdef123"),
    ("session=abcdef123", "abcdef123"),
    ("Authorization: Bearer abc.def", "abc.def"),
    ("password=hunter2", "hunter2"),
    ("secret: topsecret", "topsecret"),
])
def test_secrets_are_masked(message, secret):
    result = filtered(message)

    assert secret not in result
    assert '***MASKED***' in result


def test_premium_keys_are_masked():
    result = filtered("Request started: DELETE /admin/keys/PREM-Ab3_x-9zQ [request_id=1]")

    assert 'PREM-***MASKED***' in result
    assert 'Ab3_x-9zQ' not in result
    assert '[request_id=1]' in result


def test_query_masking_stops_at_ampersand():
    assert filtered("token=abc&page=2").endswith("&page=2")


def test_args_are_masked():
    assert 'PREM-xyz' not in filtered("deleting %s", "PREM-xyz")


def test_plain_messages_untouched():
    assert filtered("Saved movie [slug=heat]") == "Saved movie [slug=heat]"


def test_get_logger_returns_named_logger():
    assert get_logger('portal.kv_store').name == 'portal.kv_store'
