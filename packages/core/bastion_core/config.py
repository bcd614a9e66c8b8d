"""
bastion_core.config
~~~~~~~~~~~~~~~~~~~
Pydantic v2 configuration models for the gateway plugins.

One model per plugin, loaded once per route binding.  All models are
immutable (``frozen=True``) and reject unknown keys (``extra="forbid"``)
so a typo in a route definition fails at load time instead of being
silently ignored.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt


class Algorithm(StrEnum):
    """Signature algorithms accepted for inbound tokens."""

    HS256 = "HS256"
    RS256 = "RS256"


class _PluginConfig(BaseModel):
    """Shared base: immutable, closed schema."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


class ClaimMapping(_PluginConfig):
    """Copy verified claim ``claim`` into request header ``header``."""

    claim: str = Field(..., min_length=1)
    header: str = Field(..., min_length=1)


def _default_payload_mapping() -> tuple[ClaimMapping, ...]:
    return (
        ClaimMapping(claim="sub", header="X-User-ID"),
        ClaimMapping(claim="exp", header="X-User-Exp"),
        ClaimMapping(claim="iat", header="X-User-Iat"),
    )


class JWTAuthConfig(_PluginConfig):
    """Configuration for the ``custom-jwt-auth`` plugin.

    Example::

        conf = JWTAuthConfig(key="mobile-app", secret=public_key_pem)
    """

    key: str = Field(..., description="Consumer key set on authenticated requests.")
    secret: str = Field(
        ...,
        description="HMAC secret (HS256) or PEM public key (RS256) for verification.",
    )
    key_header: str = Field(
        default="X-Consumer-Key",
        min_length=1,
        description="Header that receives the consumer key.",
    )
    force_auth: StrictBool = Field(
        default=False,
        description="Reject with 401 instead of passing through on failure.",
    )
    algorithm: Algorithm = Field(default=Algorithm.RS256)
    payload_mapping: tuple[ClaimMapping, ...] = Field(
        default_factory=_default_payload_mapping,
        description="Ordered claim -> header projections.",
    )
    expose_verification_error: StrictBool = Field(
        default=True,
        description="Echo the verification failure category in the 401 body.",
    )
    leeway: StrictInt = Field(
        default=0,
        ge=0,
        description="Clock skew tolerance in seconds for time claims.",
    )


class RelayJWTConfig(_PluginConfig):
    """Configuration for the ``rsa-jwt`` relay plugin."""

    access_public_key: str = Field(
        ..., description="PEM public key verifying inbound RS256 tokens."
    )
    gateway_jwt_secret: str = Field(
        ..., description="HMAC secret signing the re-issued gateway token."
    )
    force_auth: StrictBool = False
    gateway_jwt_header: str = Field(default="X-Gateway-JWT", min_length=1)
    gateway_jwt_exp: StrictInt = Field(
        default=30,
        ge=1,
        description="Lifetime of the gateway token in seconds.",
    )
    gateway_jwt_iss: str = "api-gateway"
    gateway_jwt_aud: str = "default-app"
    payload_keys: tuple[str, ...] = ("uuid", "role")
    leeway: StrictInt = Field(default=0, ge=0)
