"""
bastion_core
~~~~~~~~~~~~
JWT verification and claim translation for an API gateway.

Public surface
--------------
All public symbols are re-exported from the top-level namespace::

    # Preferred
    from bastion_core import load_plugin, verify_jwt

    # Also valid
    from bastion_core.auth.jwt import verify_jwt

Sub-module summary
------------------
:mod:`bastion_core.auth`
    Bearer extraction, JWT verification and signing, claim validators,
    and the force/soft-fail access decision.

:mod:`bastion_core.plugins`
    The ``custom-jwt-auth`` (claim -> header) and ``rsa-jwt`` (token
    relay) plugins and their registry.

:mod:`bastion_core.config`
    Pydantic v2 plugin configuration models.

:mod:`bastion_core.errors`
    Exception hierarchy rooted at :exc:`BastionError`.

:mod:`bastion_core.middleware`
    Starlette middleware hosting a plugin.

:mod:`bastion_core.settings` / :mod:`bastion_core.app`
    Environment settings and the FastAPI app factory.
"""

from __future__ import annotations

# --- Authentication ---------------------------------------------------------
from bastion_core.auth import (
    AccessResult,
    ClaimSpec,
    Proceed,
    Reject,
    decide,
    extract_bearer_token,
    sign_jwt,
    timing_spec,
    verify_jwt,
)

# --- Configuration ----------------------------------------------------------
from bastion_core.config import Algorithm, ClaimMapping, JWTAuthConfig, RelayJWTConfig

# --- Exceptions -------------------------------------------------------------
from bastion_core.errors import (
    AlgorithmMismatchError,
    AuthenticationError,
    BastionError,
    ClaimValidationError,
    InvalidTokenError,
    MissingAuthHeaderError,
    PluginConfigError,
    SignatureInvalidError,
    TokenVerificationError,
)

# --- Logging ----------------------------------------------------------------
from bastion_core.logging import SENSITIVE_KEYS, JsonFormatter, configure_logging

# --- Host integration -------------------------------------------------------
from bastion_core.middleware import PluginMiddleware, install_plugins

# --- Plugins ----------------------------------------------------------------
from bastion_core.plugins import (
    PLUGINS,
    JWTAuthPlugin,
    RelayJWTPlugin,
    build_filtered_payload,
    check_schema,
    load_plugin,
    project_claims,
    reissue_token,
)

__all__: list[str] = [
    # Auth
    "AccessResult",
    "ClaimSpec",
    "Proceed",
    "Reject",
    "decide",
    "extract_bearer_token",
    "sign_jwt",
    "timing_spec",
    "verify_jwt",
    # Config
    "Algorithm",
    "ClaimMapping",
    "JWTAuthConfig",
    "RelayJWTConfig",
    # Errors
    "AlgorithmMismatchError",
    "AuthenticationError",
    "BastionError",
    "ClaimValidationError",
    "InvalidTokenError",
    "MissingAuthHeaderError",
    "PluginConfigError",
    "SignatureInvalidError",
    "TokenVerificationError",
    # Logging
    "configure_logging",
    "JsonFormatter",
    "SENSITIVE_KEYS",
    # Middleware
    "PluginMiddleware",
    "install_plugins",
    # Plugins
    "PLUGINS",
    "JWTAuthPlugin",
    "RelayJWTPlugin",
    "build_filtered_payload",
    "check_schema",
    "load_plugin",
    "project_claims",
    "reissue_token",
]

__version__: str = "0.1.0"
