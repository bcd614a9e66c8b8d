"""
bastion_core.logging
~~~~~~~~~~~~~~~~~~~~
Structured JSON logging for services hosting Bastion plugins.

Each record becomes one JSON line with ``level``, ``logger``, ``message``,
``service`` and ``timestamp`` plus any ``extra={...}`` context.  Key
material is kept out of the output two ways:

- by field name: values under :data:`SENSITIVE_KEYS` are replaced whole;
- by content: compact JWTs, PEM blocks and ``Bearer`` credentials are
  replaced wherever they occur, so a PyJWT diagnostic carried in a
  ``reason`` field cannot leak a token or key.

Usage::

    from bastion_core.logging import configure_logging

    configure_logging(level="INFO", service_name="bastion-gateway")
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any

REDACTED = "[REDACTED]"

# Field names whose values should never be logged verbatim.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "secret",
        "token",
        "authorization",
        "gateway_jwt",
        "gateway_jwt_secret",
        "access_public_key",
        "private_key",
        "x-gateway-jwt",
    }
)

_SECRET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"-----BEGIN [A-Z0-9 ]+-----.*?-----END [A-Z0-9 ]+-----", re.DOTALL),
    re.compile(r"eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*"),
    re.compile(r"(?i)\bbearer\s+\S+"),
)

# Attributes every LogRecord carries; anything else came in via ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


def scrub(text: str) -> str:
    """Replace tokens, PEM blocks and bearer credentials inside ``text``."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(REDACTED, text)
    return text


def redact(value: Any, key: str = "") -> Any:
    """Recursively redact a log field by name and by content."""
    if key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, str):
        return scrub(value)
    if isinstance(value, dict):
        return {k: redact(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


class JsonFormatter(logging.Formatter):
    """One redacted JSON object per line."""

    def __init__(self, service_name: str = "bastion") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": scrub(record.getMessage()),
            "service": self.service_name,
            "timestamp": self.formatTime(record),
        }
        payload.update(
            (key, redact(val, key))
            for key, val in vars(record).items()
            if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exc_info"] = scrub(self.formatException(record.exc_info))
        return json.dumps(payload, default=lambda v: scrub(str(v)))


def configure_logging(level: str = "INFO", service_name: str = "bastion") -> None:
    """Route the root logger through :class:`JsonFormatter` on stdout.

    Call once at service startup, before any other logging occurs.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service_name=service_name))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]
