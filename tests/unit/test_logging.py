"""
Unit Tests for Logging
======================

Tests for redaction and context binding.
"""

import structlog

from blockcreds.logging import bind_context, censor_sensitive, clear_context
from blockcreds.logging.logger import REDACTED


class TestCensorSensitive:
    """Tests for the redaction processor."""

    def test_witness_values_redacted(self):
        event = censor_sensitive(None, "info", {"event": "x", "score": 800, "salt": 12345})

        assert event == {"event": "x", "score": REDACTED, "salt": REDACTED}

    def test_public_values_kept(self):
        event = censor_sensitive(
            None,
            "info",
            {"min_score": 750, "commitment": "123", "token_amount": 2},
        )

        assert event == {"min_score": 750, "commitment": "123", "token_amount": 2}

    def test_secrets_redacted_by_substring(self):
        event = censor_sensitive(None, "info", {"DB_PASSWORD": "hunter2", "rpc_api_key": "k"})

        assert event["DB_PASSWORD"] == REDACTED
        assert event["rpc_api_key"] == REDACTED

    def test_nested_dicts(self):
        event = censor_sensitive(
            None,
            "info",
            {"input": {"minScore": 750, "score": 800, "salt": 1}},
        )

        assert event["input"] == {"minScore": 750, "score": REDACTED, "salt": REDACTED}


class TestContext:
    def test_bind_and_clear(self):
        clear_context()
        bind_context(request_id="abc")

        assert structlog.contextvars.get_contextvars() == {"request_id": "abc"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
