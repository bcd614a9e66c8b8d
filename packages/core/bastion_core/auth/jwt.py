"""
bastion_core.auth.jwt
~~~~~~~~~~~~~~~~~~~~~
JWT verification and signing.

Uses PyJWT (with ``cryptography`` for RS256).  Verification runs in a
fixed order and stops at the first failure:

1. decode        - header and payload must be well-formed     -> InvalidTokenError
2. algorithm     - header ``alg`` must equal the configured one -> AlgorithmMismatchError
3. signature     - verified with PyJWT for that single algorithm -> SignatureInvalidError
4. claims        - the :class:`ClaimSpec` at ``now``            -> ClaimValidationError

The algorithm is compared before any key is touched, so an HS256 token
can never be checked against an RS256 public key used as an HMAC secret.
PyJWT's own ``exp``/``iat``/``nbf`` handling is switched off; time claims
are owned by the ClaimSpec so that ``now`` is an explicit input.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import jwt
from jwt.exceptions import PyJWTError

from bastion_core.auth.validators import ClaimSpec
from bastion_core.errors import (
    AlgorithmMismatchError,
    ClaimValidationError,
    InvalidTokenError,
    SignatureInvalidError,
)

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS: frozenset[str] = frozenset({"HS256", "RS256"})

# Gateway-issued tokens are always HMAC signed.
GATEWAY_ALGORITHM = "HS256"

_SIGNATURE_ONLY_OPTIONS: dict[str, Any] = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}


@dataclass(frozen=True)
class _DecodedToken:
    header: dict[str, Any]
    payload: dict[str, Any]


def _decode_unverified(token: str) -> _DecodedToken:
    try:
        header = jwt.get_unverified_header(token)
        payload = jwt.decode(token, options={"verify_signature": False})
    except PyJWTError as e:
        raise InvalidTokenError(str(e)) from e
    if not isinstance(payload, dict):
        raise InvalidTokenError("payload is not a JSON object")
    return _DecodedToken(header=header, payload=payload)


def verify_jwt(
    token: str,
    key: str,
    algorithm: str,
    claim_spec: ClaimSpec,
    *,
    now: int | None = None,
) -> dict[str, Any]:
    """Verify a compact JWS and return its payload.

    Args:
        token: The JWT string (without "Bearer " prefix).
        key: HMAC secret for HS256, PEM public key for RS256.
        algorithm: The only algorithm the token may declare.
        claim_spec: Validators applied to the payload after the signature.
        now: Evaluation time as a Unix timestamp (defaults to the clock).

    Returns:
        The decoded payload, unmodified.

    Raises:
        InvalidTokenError: If the token cannot be decoded.
        AlgorithmMismatchError: If the declared algorithm is not ``algorithm``.
        SignatureInvalidError: If the signature does not verify.
        ClaimValidationError: If a claim validator fails.
    """
    if now is None:
        now = int(time.time())

    try:
        decoded = _decode_unverified(token)
    except InvalidTokenError as exc:
        logger.warning("Invalid JWT token", extra={"reason": exc.detail})
        raise

    token_alg = decoded.header.get("alg")
    if token_alg != algorithm:
        logger.warning(
            "JWT algorithm mismatch",
            extra={"expected_alg": algorithm, "token_alg": token_alg},
        )
        raise AlgorithmMismatchError(
            f"expected {algorithm}, got {token_alg}",
            expected=algorithm,
            actual=str(token_alg),
        )

    try:
        jwt.decode(
            token,
            key,
            algorithms=[algorithm],
            options=_SIGNATURE_ONLY_OPTIONS,
        )
    except PyJWTError as e:
        logger.warning("JWT signature verification failed", extra={"reason": str(e)})
        raise SignatureInvalidError(str(e)) from e

    failure = claim_spec.check(decoded.payload, now)
    if failure is not None:
        claim, reason = failure
        logger.warning(
            "JWT claim validation failed",
            extra={"claim": claim, "reason": reason},
        )
        raise ClaimValidationError(f"'{claim}' {reason}", claim=claim)

    return decoded.payload


def sign_jwt(
    payload: dict[str, Any],
    secret: str,
    algorithm: str = GATEWAY_ALGORITHM,
) -> str:
    """Sign ``payload`` into a compact JWS with header ``{"typ": "JWT", "alg": ...}``."""
    return jwt.encode(payload, secret, algorithm=algorithm, headers={"typ": "JWT"})
