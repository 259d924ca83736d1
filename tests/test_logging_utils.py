"""Tests for logging utilities and sensitive data redaction."""

from __future__ import annotations

import json
import logging

import pytest

from campmeals.logging_utils import JsonFormatter, configure_logging


@pytest.mark.parametrize("fmt", ["plain", "json"])
def test_sensitive_data_filter_redacts_tokens(fmt):
    secret = "top-secret-token"
    configure_logging("INFO", fmt, [secret])

    handler = logging.getLogger().handlers[0]
    record = logging.LogRecord(
        name="campmeals.test.redaction",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="Authorization header Bearer %s",
        args=(secret,),
        exc_info=None,
    )

    for filter_ in handler.filters:
        filter_.filter(record)

    formatted = handler.format(record)
    assert secret not in formatted
    assert "[redacted]" in formatted


def test_json_formatter_includes_structured_fields():
    record = logging.LogRecord(
        name="campmeals.calculator.engine",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=0,
        msg="Generated meal grid for week of %s",
        args=("2024-06-03",),
        exc_info=None,
    )
    record.week_start = "2024-06-03"
    record.groups = 2

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Generated meal grid for week of 2024-06-03"
    assert payload["week_start"] == "2024-06-03"
    assert payload["groups"] == 2
    assert "request_id" not in payload


def test_configure_logging_falls_back_to_info_for_unknown_level():
    configure_logging("chatty", "plain", [])
    assert logging.getLogger().level == logging.INFO
