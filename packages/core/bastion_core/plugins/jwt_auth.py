"""
bastion_core.plugins.jwt_auth
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
``custom-jwt-auth``: verify the bearer token and project selected claims
into request headers for downstream services.

On success the request gains one header per mapped claim that is present
in the token, plus ``key_header: key`` naming the configured consumer.
No token content is ever echoed back to the client.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable
from typing import Any

from bastion_core.auth.bearer import extract_bearer_token
from bastion_core.auth.decision import AccessResult, Proceed, decide
from bastion_core.auth.jwt import verify_jwt
from bastion_core.auth.validators import (
    UUID_PATTERN,
    ClaimSpec,
    claim_present,
    is_not_before,
    is_not_expired,
    matches,
    opt_is_not_before,
)
from bastion_core.config import ClaimMapping, JWTAuthConfig
from bastion_core.errors import TokenVerificationError

logger = logging.getLogger(__name__)

_HIDDEN_ERROR_MESSAGE = "Invalid Authorization token"


def _header_safe(text: str) -> bool:
    if not text.isprintable():
        return False
    try:
        text.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def header_value(value: Any) -> str:
    """Render a claim value as a latin-1 header string.

    Strings that cannot travel in a header as-is (non latin-1 text,
    control characters) are sent as an ASCII JSON string literal, e.g.
    ``"\\u540d\\u524d"``.
    """
    if isinstance(value, str):
        if _header_safe(value):
            return value
        return json.dumps(value, ensure_ascii=True)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=True)


def project_claims(
    claims: dict[str, Any],
    mapping: Iterable[ClaimMapping],
    consumer_key: str,
    consumer_key_header: str,
) -> dict[str, str | None]:
    """Build the header mutations for a verified request.

    Claims missing from ``claims`` (or null/false) produce no entry, so an
    existing header of that name is left untouched.
    """
    headers: dict[str, str | None] = {}
    for entry in mapping:
        value = claims.get(entry.claim)
        if claim_present(value):
            headers[entry.header] = header_value(value)
    headers[consumer_key_header] = header_value(consumer_key)
    return headers


class JWTAuthPlugin:
    """Claim-projecting JWT authentication for one route binding."""

    name = "custom-jwt-auth"
    version = 0.1
    priority = 1000
    config_model = JWTAuthConfig

    def __init__(self, conf: JWTAuthConfig) -> None:
        self.conf = conf
        self.claim_spec = ClaimSpec(
            {
                "sub": matches(UUID_PATTERN),
                "exp": is_not_expired(conf.leeway),
                "iat": is_not_before(conf.leeway),
                "nbf": opt_is_not_before(conf.leeway),
            }
        )

    def access(self, authorization: str | None, *, now: int | None = None) -> AccessResult:
        conf = self.conf
        token = extract_bearer_token(authorization)
        if token is None:
            logger.warning(
                "Missing or invalid Authorization header",
                extra={"plugin": self.name, "force_auth": conf.force_auth},
            )
            return decide(None, None, conf.force_auth)

        if now is None:
            now = int(time.time())

        try:
            claims = verify_jwt(token, conf.secret, conf.algorithm.value, self.claim_spec, now=now)
        except TokenVerificationError as exc:
            logger.warning(
                "JWT verification failed",
                extra={
                    "plugin": self.name,
                    "error": type(exc).__name__,
                    "force_auth": conf.force_auth,
                },
            )
            message = None if conf.expose_verification_error else _HIDDEN_ERROR_MESSAGE
            return decide(token, exc, conf.force_auth, message=message)

        headers = project_claims(claims, conf.payload_mapping, conf.key, conf.key_header)
        logger.info(
            "JWT token verified and headers set for consumer",
            extra={"plugin": self.name, "consumer": conf.key},
        )
        return Proceed(claims=claims, headers=headers)
