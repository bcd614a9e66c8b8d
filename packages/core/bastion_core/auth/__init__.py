"""
bastion_core.auth
~~~~~~~~~~~~~~~~~
Token extraction, verification and the access decision.

Provides:
- Bearer token extraction from the Authorization header
- JWT verification with algorithm pinning and claim validators
- HS256 signing for gateway-issued tokens
- The force/soft-fail access decision
"""

from __future__ import annotations

from bastion_core.auth.bearer import extract_bearer_token
from bastion_core.auth.decision import AccessResult, Proceed, Reject, decide
from bastion_core.auth.jwt import (
    GATEWAY_ALGORITHM,
    SUPPORTED_ALGORITHMS,
    sign_jwt,
    verify_jwt,
)
from bastion_core.auth.validators import (
    UUID_PATTERN,
    VALIDATORS,
    ClaimSpec,
    claim_present,
    is_not_before,
    is_not_expired,
    matches,
    opt_is_not_before,
    timing_spec,
)

__all__ = [
    "AccessResult",
    "ClaimSpec",
    "claim_present",
    "GATEWAY_ALGORITHM",
    "Proceed",
    "Reject",
    "SUPPORTED_ALGORITHMS",
    "UUID_PATTERN",
    "VALIDATORS",
    "decide",
    "extract_bearer_token",
    "is_not_before",
    "is_not_expired",
    "matches",
    "opt_is_not_before",
    "sign_jwt",
    "timing_spec",
    "verify_jwt",
]
