"""
Shared fixtures for bastion_core tests.

Provides an RSA keypair (generated once per session), HMAC secrets long
enough for PyJWT's key-length checks, a fixed evaluation time, and a
token factory.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

NOW = 1_700_000_000
USER_ID = "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"
HMAC_SECRET = "test-hmac-secret-0123456789abcdef0123456789"
GATEWAY_SECRET = "gateway-secret-0123456789abcdef0123456789ab"


@pytest.fixture(scope="session")
def rsa_keys() -> tuple[str, str]:
    """Return ``(private_pem, public_pem)``."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return private_pem, public_pem


@pytest.fixture(scope="session")
def private_pem(rsa_keys: tuple[str, str]) -> str:
    return rsa_keys[0]


@pytest.fixture(scope="session")
def public_pem(rsa_keys: tuple[str, str]) -> str:
    return rsa_keys[1]


def claims(**overrides: Any) -> dict[str, Any]:
    """Valid claims at NOW; override or drop (value None) as needed."""
    base: dict[str, Any] = {
        "sub": USER_ID,
        "iat": NOW - 60,
        "exp": NOW + 3600,
        "uuid": "abc",
        "role": "admin",
    }
    base.update(overrides)
    return {k: v for k, v in base.items() if v is not None}


@pytest.fixture()
def make_token(private_pem: str) -> Callable[..., str]:
    """Build a signed token: ``make_token(alg="RS256", **claim_overrides)``."""

    def _make(alg: str = "RS256", key: str | None = None, **overrides: Any) -> str:
        if key is None:
            key = private_pem if alg == "RS256" else HMAC_SECRET
        return jwt.encode(claims(**overrides), key, algorithm=alg)

    return _make
