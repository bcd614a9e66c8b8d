"""
bastion_core.auth.validators
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Named claim validators and their composition into a :class:`ClaimSpec`.

A validator is a plain function ``(value, now) -> str | None`` that
returns ``None`` when the claim is acceptable and a human-readable reason
otherwise.  ``value`` is :data:`MISSING` when the claim is absent from the
payload.  Validators are built by the factories in :data:`VALIDATORS`::

    spec = ClaimSpec({
        "exp": is_not_expired(),
        "iat": is_not_before(),
        "sub": matches(UUID_PATTERN),
    })
    failure = spec.check(payload, now=1_700_000_000)
    if failure is not None:
        claim, reason = failure
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

# Sentinel for "claim not present in payload".
MISSING: Any = object()

Validator = Callable[[Any, int], str | None]

UUID_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def claim_present(value: Any) -> bool:
    """Null and ``false`` claims count as absent when copying claims onward."""
    return value is not None and value is not False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _optional(validator: Validator) -> Validator:
    def _check(value: Any, now: int) -> str | None:
        if value is MISSING:
            return None
        return validator(value, now)

    return _check


def is_not_expired(leeway: int = 0) -> Validator:
    """Claim is a timestamp at or after ``now`` (minus leeway)."""

    def _check(value: Any, now: int) -> str | None:
        if value is MISSING:
            return "claim is required"
        if not _is_number(value):
            return "claim must be a number"
        if value + leeway < now:
            return f"claim expired at {value}"
        return None

    return _check


def is_not_before(leeway: int = 0) -> Validator:
    """Claim is a timestamp at or before ``now`` (plus leeway)."""

    def _check(value: Any, now: int) -> str | None:
        if value is MISSING:
            return "claim is required"
        if not _is_number(value):
            return "claim must be a number"
        if value - leeway > now:
            return f"claim not valid until {value}"
        return None

    return _check


def opt_is_not_before(leeway: int = 0) -> Validator:
    return _optional(is_not_before(leeway))


def matches(pattern: str) -> Validator:
    """Claim is a string fully matching ``pattern``."""
    compiled = re.compile(pattern)

    def _check(value: Any, now: int) -> str | None:
        if value is MISSING:
            return "claim is required"
        if not isinstance(value, str):
            return "claim must be a string"
        if compiled.fullmatch(value) is None:
            return f"claim does not match {pattern!r}"
        return None

    return _check


VALIDATORS: dict[str, Callable[..., Validator]] = {
    "is_not_expired": is_not_expired,
    "is_not_before": is_not_before,
    "opt_is_not_before": opt_is_not_before,
    "matches": matches,
}


class ClaimSpec:
    """Ordered mapping of claim name to validator."""

    def __init__(self, validators: Mapping[str, Validator]) -> None:
        self._validators = dict(validators)

    @property
    def claims(self) -> tuple[str, ...]:
        return tuple(self._validators)

    def check(self, payload: Mapping[str, Any], now: int) -> tuple[str, str] | None:
        """Return ``(claim, reason)`` for the first failing validator, else None."""
        for claim, validator in self._validators.items():
            reason = validator(payload.get(claim, MISSING), now)
            if reason is not None:
                return claim, reason
        return None


def timing_spec(leeway: int = 0) -> ClaimSpec:
    """``exp``/``iat`` checks shared by every plugin, plus ``nbf`` when present."""
    return ClaimSpec(
        {
            "exp": is_not_expired(leeway),
            "iat": is_not_before(leeway),
            "nbf": opt_is_not_before(leeway),
        }
    )
