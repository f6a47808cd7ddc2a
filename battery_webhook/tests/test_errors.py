"""Tests for the error taxonomy and Outcome."""

import pytest

from battery_webhook.errors import (
    ErrorKind,
    Outcome,
    WebhookDecodeError,
    WebhookError,
    WebhookServiceError,
    WebhookSystemError,
)


class TestErrorKinds:
    """Test that every error class reports its kind."""

    def test_kinds(self):
        assert WebhookSystemError("x").kind is ErrorKind.SYSTEM
        assert WebhookServiceError("{}").kind is ErrorKind.SERVICE
        assert WebhookDecodeError("{}", "bad").kind is ErrorKind.DECODE

    def test_all_are_webhook_errors(self):
        for error in (
            WebhookSystemError("x"),
            WebhookServiceError("{}"),
            WebhookDecodeError("{}", "bad"),
        ):
            assert isinstance(error, WebhookError)

    def test_service_error_defaults_raw_to_body(self):
        """Test that raw bytes fall back to the encoded body text."""
        error = WebhookServiceError('{"a": "é"}')
        assert error.raw == '{"a": "é"}'.encode("utf-8")
        assert error.status is None

    def test_decode_error_message_keeps_body(self):
        """Test that the decode error message includes the raw text."""
        error = WebhookDecodeError('{"unexpected":"shape"}', "missing code")
        assert '{"unexpected":"shape"}' in str(error)
        assert "missing code" in str(error)


class TestOutcome:
    """Test Outcome."""

    def test_success(self):
        outcome = Outcome.success()

        assert outcome.ok is True
        assert outcome.kind is None
        outcome.raise_for_error()

    def test_failure(self):
        error = WebhookSystemError("connection refused")
        outcome = Outcome.failure(error)

        assert outcome.ok is False
        assert outcome.kind is ErrorKind.SYSTEM
        with pytest.raises(WebhookSystemError, match="connection refused"):
            outcome.raise_for_error()

    def test_outcome_is_immutable(self):
        outcome = Outcome.success()
        with pytest.raises(AttributeError):
            outcome.error = WebhookSystemError("x")
