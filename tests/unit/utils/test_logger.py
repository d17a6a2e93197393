"""Tests for logging helpers."""

import pytest

from policy_assistant.utils.logger import (
    bind_request_id,
    clear_request_context,
    get_request_id,
    truncate,
)


@pytest.fixture(autouse=True)
def _clean_context():
    clear_request_context()
    yield
    clear_request_context()


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("hello", max_length=10) == "hello"

    def test_long_text_reports_remainder(self):
        assert truncate("a" * 15, max_length=10) == "a" * 10 + "... [5 more chars]"


class TestRequestContext:
    def test_no_request_id_by_default(self):
        assert get_request_id() is None

    def test_bind_given_id(self):
        assert bind_request_id("req-123") == "req-123"
        assert get_request_id() == "req-123"

    def test_bind_generates_id(self):
        request_id = bind_request_id()

        assert request_id
        assert get_request_id() == request_id

    def test_clear(self):
        bind_request_id("req-123")
        clear_request_context()

        assert get_request_id() is None
