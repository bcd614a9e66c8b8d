"""
bastion_core.settings
~~~~~~~~~~~~~~~~~~~~~
Process settings for a gateway service hosting Bastion plugins.

``BASTION_PLUGINS`` holds the route bindings as a JSON list::

    BASTION_PLUGINS='[{"name": "rsa-jwt", "config": {"access_public_key": "...",
                                                    "gateway_jwt_secret": "..."}}]'

Binding configs are kept as raw dicts here and validated against the
plugin schema by :func:`bastion_core.middleware.install_plugins`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PluginBinding(BaseModel):
    """One plugin attached to the service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)


class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BASTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Identity
    SERVICE_NAME: str = "bastion-gateway"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Route bindings
    PLUGINS: list[PluginBinding] = Field(default_factory=list)
