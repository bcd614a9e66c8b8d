"""
bastion_core.plugins.relay
~~~~~~~~~~~~~~~~~~~~~~~~~~
``rsa-jwt``: verify an externally issued RS256 token and relay a new,
gateway-signed HS256 token to the internal service boundary.

The re-issued payload is always::

    {"exp": now + gateway_jwt_exp, "iat": now,
     "iss": gateway_jwt_iss, "aud": gateway_jwt_aud}

overlaid with each ``payload_keys`` claim present in the inbound token.
The four fixed claims cannot be overridden by pass-through keys.

The output header is removed from every request before anything else, so
a client-supplied or stale value never reaches downstream services.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from bastion_core.auth.bearer import extract_bearer_token
from bastion_core.auth.decision import AccessResult, Proceed, Reject, decide
from bastion_core.auth.jwt import GATEWAY_ALGORITHM, sign_jwt, verify_jwt
from bastion_core.auth.validators import claim_present, timing_spec
from bastion_core.config import Algorithm, RelayJWTConfig
from bastion_core.errors import TokenVerificationError

logger = logging.getLogger(__name__)

FIXED_CLAIMS: frozenset[str] = frozenset({"exp", "iat", "iss", "aud"})


def build_filtered_payload(
    claims: dict[str, Any],
    conf: RelayJWTConfig,
    now: int,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "exp": now + conf.gateway_jwt_exp,
        "iat": now,
        "iss": conf.gateway_jwt_iss,
        "aud": conf.gateway_jwt_aud,
    }
    for key in conf.payload_keys:
        if key in FIXED_CLAIMS:
            continue
        value = claims.get(key)
        if claim_present(value):
            payload[key] = value
    return payload


def reissue_token(claims: dict[str, Any], conf: RelayJWTConfig, now: int) -> str:
    """Sign the filtered payload with the gateway secret (always HS256)."""
    return sign_jwt(
        build_filtered_payload(claims, conf, now),
        conf.gateway_jwt_secret,
        GATEWAY_ALGORITHM,
    )


class RelayJWTPlugin:
    """Token-translating JWT authentication for one route binding."""

    name = "rsa-jwt"
    version = 0.1
    priority = 1000
    config_model = RelayJWTConfig

    # Inbound tokens come from the external identity provider.
    algorithm = Algorithm.RS256

    def __init__(self, conf: RelayJWTConfig) -> None:
        self.conf = conf
        self.claim_spec = timing_spec(conf.leeway)

    def access(self, authorization: str | None, *, now: int | None = None) -> AccessResult:
        conf = self.conf
        cleared: dict[str, str | None] = {conf.gateway_jwt_header: None}

        token = extract_bearer_token(authorization)
        if token is None:
            logger.debug("No bearer token", extra={"plugin": self.name})
            return self._with_headers(decide(None, None, conf.force_auth), cleared)

        if now is None:
            now = int(time.time())

        try:
            claims = verify_jwt(
                token,
                conf.access_public_key,
                self.algorithm.value,
                self.claim_spec,
                now=now,
            )
        except TokenVerificationError as exc:
            logger.warning(
                "Inbound JWT rejected",
                extra={
                    "plugin": self.name,
                    "error": type(exc).__name__,
                    "force_auth": conf.force_auth,
                },
            )
            return self._with_headers(decide(token, exc, conf.force_auth), cleared)

        gateway_jwt = reissue_token(claims, conf, now)
        logger.debug(
            "Gateway JWT issued",
            extra={"plugin": self.name, "aud": conf.gateway_jwt_aud},
        )
        return Proceed(claims=claims, headers={conf.gateway_jwt_header: gateway_jwt})

    @staticmethod
    def _with_headers(result: AccessResult, headers: dict[str, str | None]) -> AccessResult:
        if isinstance(result, Reject):
            return result
        return Proceed(claims=result.claims, headers=headers)
