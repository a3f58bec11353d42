"""Tests for correlation id header handling."""
# pylint: disable=missing-function-docstring

from scripture_engine.apps.api.middleware import (
    incoming_correlation_id,
    with_correlation_headers,
)


def test_incoming_id_prefers_request_id_then_correlation_id():
    headers = [(b"X-Correlation-ID", b"corr"), (b"X-Request-ID", b"req")]
    assert incoming_correlation_id(headers) == "req"
    assert incoming_correlation_id([(b"x-correlation-id", b"corr")]) == "corr"


def test_incoming_id_is_generated_when_absent_or_blank():
    generated = incoming_correlation_id([(b"x-request-id", b"")])
    assert len(generated) == 32
    assert generated != incoming_correlation_id([])


def test_existing_response_headers_are_not_duplicated():
    headers = with_correlation_headers([(b"x-request-id", b"upstream")], "abc")
    assert headers == [(b"x-request-id", b"upstream"), (b"x-correlation-id", b"abc")]
