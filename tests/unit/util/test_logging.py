"""Tests for the secret redacting log filter."""

import logging

from gate.util.logging import SecretRedactingFilter


def make_record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("httpx", logging.INFO, __file__, 1, msg, args, None)


class TestSecretRedactingFilter:
    """Tests for SecretRedactingFilter."""

    def test_redacts_bot_token_in_formatted_message(self):
        log_filter = SecretRedactingFilter(["123456:ABC-token", ""])
        record = make_record(
            "HTTP Request: POST %s", "https://api.telegram.org/bot123456:ABC-token/x"
        )

        assert log_filter.filter(record) is True
        assert record.getMessage() == (
            "HTTP Request: POST https://api.telegram.org/bot[redacted]/x"
        )

    def test_leaves_other_records_alone(self):
        log_filter = SecretRedactingFilter(["123456:ABC-token"])
        record = make_record("Link issued for %s", "ABC12345")

        log_filter.filter(record)

        assert record.msg == "Link issued for %s"
        assert record.getMessage() == "Link issued for ABC12345"
