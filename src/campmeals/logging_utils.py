"""Logging setup for the API server and the CLI.

Log lines pass through :class:`SensitiveDataFilter` so the API token never
reaches the output, and ``json`` format emits one object per line carrying
the calculation context (week, roster sizes, request id) when a call site
provides it via ``extra``.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable

REDACTED = "[redacted]"

STRUCTURED_FIELDS = ("request_id", "week_start", "groups", "staff")

_CREDENTIAL_PATTERNS = (
    re.compile(r"(Bearer\s+)([A-Za-z0-9\-._~+/=]+)", re.IGNORECASE),
    re.compile(r"(X-API-Key[=:]\s*)([^&\s]+)", re.IGNORECASE),
)

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def redact(text: str, secrets: Iterable[str] = ()) -> str:
    """Mask auth header values and every literal secret in ``text``."""

    for pattern in _CREDENTIAL_PATTERNS:
        text = pattern.sub(r"\1" + REDACTED, text)
    for secret in secrets:
        text = text.replace(secret, REDACTED)
    return text


class SensitiveDataFilter(logging.Filter):
    """Filter that redacts the API token and auth headers from log records."""

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        self._secrets = tuple(s.strip() for s in secrets if s and s.strip())

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - standard interface
        message = record.getMessage()
        cleaned = redact(message, self._secrets)
        if cleaned != message:
            record.msg, record.args = cleaned, ()

        if self._secrets:
            for name, value in list(vars(record).items()):
                if isinstance(value, str):
                    setattr(record, name, redact(value, self._secrets))
        return True


def _json_value(value: Any) -> Any:
    if isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with calculation context when present."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, _json_value(getattr(record, name)))
            for name in STRUCTURED_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def _build_formatter(fmt: str) -> logging.Formatter:
    if (fmt or "plain").lower() == "json":
        return JsonFormatter()
    return logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def configure_logging(level_name: str, fmt: str, secrets: Iterable[str]) -> None:
    """Replace root handlers with a single redacting stream handler.

    Unknown level names fall back to INFO. uvicorn's loggers are routed
    through the same handler so access lines are redacted too.
    """

    level = getattr(logging, (level_name or "").upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    redactor = SensitiveDataFilter(secrets)
    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(fmt))
    handler.addFilter(redactor)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.captureWarnings(True)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.setLevel(level)
        server_logger.propagate = True
        server_logger.addFilter(redactor)
