"""
bastion_core.errors
~~~~~~~~~~~~~~~~~~~
Custom exception hierarchy for Bastion.

All Bastion exceptions inherit from BastionError so callers can catch the
full family with a single ``except BastionError`` clause while still
being able to discriminate at finer granularity.

Authentication failures carry two messages: ``public_message`` is a short
fixed string that may be returned to the client, ``detail`` is the
diagnostic text (often from PyJWT) that only goes to the logs.
"""

from __future__ import annotations

from typing import Any


class BastionError(Exception):
    """Base class for all Bastion exceptions."""


class PluginConfigError(BastionError):
    """Raised when a plugin configuration fails schema validation.

    Attributes:
        plugin: Registered name of the plugin being configured.
        errors: Validation errors as reported by pydantic.
    """

    def __init__(
        self,
        message: str,
        *,
        plugin: str = "",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.plugin = plugin
        self.errors = errors or []


class AuthenticationError(BastionError):
    """Base class for per-request authentication failures.

    These are always recoverable at the request boundary.
    """

    public_message = "Unauthorized"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail


class MissingAuthHeaderError(AuthenticationError):
    """No usable ``Bearer`` credential in the Authorization header."""

    public_message = "Missing or Invalid Authorization header"


class TokenVerificationError(AuthenticationError):
    """A bearer token was present but could not be verified."""

    public_message = "JWT verification failed"


class InvalidTokenError(TokenVerificationError):
    """Token is not a decodable compact JWS."""

    public_message = "Invalid JWT token"


class AlgorithmMismatchError(TokenVerificationError):
    """Token header ``alg`` differs from the configured algorithm.

    Attributes:
        expected: The configured algorithm.
        actual: The algorithm the token declared.
    """

    public_message = "JWT algorithm mismatch"

    def __init__(self, detail: str = "", *, expected: str = "", actual: str = "") -> None:
        super().__init__(detail)
        self.expected = expected
        self.actual = actual


class SignatureInvalidError(TokenVerificationError):
    """Signature did not verify under the configured key and algorithm."""


class ClaimValidationError(TokenVerificationError):
    """A declared claim validator rejected the payload.

    Attributes:
        claim: Name of the offending claim.
    """

    def __init__(self, detail: str = "", *, claim: str = "") -> None:
        super().__init__(detail)
        self.claim = claim
