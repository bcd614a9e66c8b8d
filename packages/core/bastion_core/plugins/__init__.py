"""
bastion_core.plugins
~~~~~~~~~~~~~~~~~~~~
Registry of gateway authentication plugins.

Each plugin class exposes ``name``, ``version``, ``priority``, a pydantic
``config_model`` and ``access(authorization, *, now=None)``.  Instances
hold only their frozen config, so one instance serves every request on
its route binding.

Usage::

    plugin = load_plugin("rsa-jwt", {
        "access_public_key": public_pem,
        "gateway_jwt_secret": secret,
    })
    result = plugin.access(request.headers.get("authorization"))
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from bastion_core.errors import PluginConfigError
from bastion_core.plugins.jwt_auth import JWTAuthPlugin, project_claims
from bastion_core.plugins.relay import (
    RelayJWTPlugin,
    build_filtered_payload,
    reissue_token,
)

logger = logging.getLogger(__name__)

Plugin = JWTAuthPlugin | RelayJWTPlugin

PLUGINS: dict[str, type[JWTAuthPlugin] | type[RelayJWTPlugin]] = {
    JWTAuthPlugin.name: JWTAuthPlugin,
    RelayJWTPlugin.name: RelayJWTPlugin,
}


def check_schema(name: str, conf: dict[str, Any]) -> BaseModel:
    """Validate ``conf`` against the named plugin's schema.

    Returns:
        The frozen config model with defaults applied.

    Raises:
        PluginConfigError: If the plugin is unknown or ``conf`` is invalid
            (missing required keys, wrong types, unknown keys).
    """
    plugin_cls = PLUGINS.get(name)
    if plugin_cls is None:
        raise PluginConfigError(f"Unknown plugin '{name}'", plugin=name)
    try:
        return plugin_cls.config_model.model_validate(conf)
    except ValidationError as exc:
        raise PluginConfigError(
            f"Invalid configuration for plugin '{name}': {exc.error_count()} error(s)",
            plugin=name,
            errors=exc.errors(include_input=False),
        ) from exc


def load_plugin(name: str, conf: dict[str, Any]) -> Plugin:
    """Validate ``conf`` and return a ready plugin instance."""
    validated = check_schema(name, conf)
    plugin = PLUGINS[name](validated)  # type: ignore[arg-type]
    logger.info("Plugin loaded", extra={"plugin": name})
    return plugin


__all__ = [
    "JWTAuthPlugin",
    "PLUGINS",
    "Plugin",
    "RelayJWTPlugin",
    "build_filtered_payload",
    "check_schema",
    "load_plugin",
    "project_claims",
    "reissue_token",
]
