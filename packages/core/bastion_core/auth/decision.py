"""
bastion_core.auth.decision
~~~~~~~~~~~~~~~~~~~~~~~~~~
The force/soft-fail access decision shared by every plugin.

``force_auth=True`` turns any failure into a 401.  ``force_auth=False``
makes authentication advisory: failures let the request through
unauthenticated and with no header changes, a verified token lets the
plugin enrich the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bastion_core.errors import AuthenticationError, MissingAuthHeaderError


@dataclass(frozen=True)
class Proceed:
    """Let the request continue.

    ``claims`` is None on the unauthenticated pass-through path.
    ``headers`` maps header name to the value to set, or None to remove it.
    """

    claims: dict[str, Any] | None = None
    headers: dict[str, str | None] = field(default_factory=dict)

    @property
    def authenticated(self) -> bool:
        return self.claims is not None


@dataclass(frozen=True)
class Reject:
    """Terminate the request with ``status_code`` and ``{"message": message}``."""

    status_code: int
    message: str

    def body(self) -> dict[str, str]:
        return {"message": self.message}


AccessResult = Proceed | Reject


def decide(
    token: str | None,
    error: AuthenticationError | None,
    force_auth: bool,
    *,
    claims: dict[str, Any] | None = None,
    message: str | None = None,
) -> AccessResult:
    """Map an extract/verify outcome to :class:`Proceed` or :class:`Reject`.

    Args:
        token: Result of bearer extraction (None when absent).
        error: Verification failure, or None when ``claims`` verified.
        force_auth: Reject on failure instead of passing through.
        claims: Verified claims on success.
        message: Override for the rejection message of a verification
            failure.  Defaults to the error's ``public_message``.
    """
    if token is None:
        if force_auth:
            return Reject(401, MissingAuthHeaderError.public_message)
        return Proceed()

    if error is not None or claims is None:
        if force_auth:
            if message is None:
                message = error.public_message if error else "JWT verification failed"
            return Reject(401, message)
        return Proceed()

    return Proceed(claims=claims)
