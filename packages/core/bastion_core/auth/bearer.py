"""
bastion_core.auth.bearer
~~~~~~~~~~~~~~~~~~~~~~~~
Bearer credential extraction from a raw Authorization header value.
"""

from __future__ import annotations

_SCHEME = "bearer "


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token following a case-insensitive ``Bearer `` prefix.

    The remainder is returned verbatim (no further trimming).  Anything
    else, including an empty remainder, yields None.

    Example::

        >>> extract_bearer_token("bearer abc.def.ghi")
        'abc.def.ghi'
        >>> extract_bearer_token("Basic dXNlcjpwYXNz") is None
        True
    """
    if not header:
        return None
    if header[: len(_SCHEME)].lower() != _SCHEME:
        return None
    return header[len(_SCHEME) :] or None
