"""
bastion_core.app
~~~~~~~~~~~~~~~~
FastAPI application factory for a gateway edge running Bastion plugins.

Start with::

    uvicorn bastion_core.app:create_app --factory --port 8000

Downstream routes are mounted by the embedding service; this factory
only wires settings, logging and the configured plugin bindings.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from bastion_core.logging import configure_logging
from bastion_core.middleware import install_plugins
from bastion_core.settings import GatewaySettings

logger = logging.getLogger(__name__)


def create_app(
    settings: GatewaySettings | None = None,
    *,
    setup_logging: bool = True,
) -> FastAPI:
    """Build the app and install every binding from ``settings.PLUGINS``.

    Raises:
        PluginConfigError: If a binding's config is invalid.
    """
    settings = settings or GatewaySettings()
    if setup_logging:
        configure_logging(level=settings.LOG_LEVEL, service_name=settings.SERVICE_NAME)

    app = FastAPI(title=settings.SERVICE_NAME)
    plugins = install_plugins(app, settings.PLUGINS)
    app.state.plugins = plugins

    @app.get("/health")
    async def health() -> dict[str, object]:
        return {
            "status": "healthy",
            "service": settings.SERVICE_NAME,
            "plugins": [p.name for p in plugins],
        }

    logger.info(
        "Gateway configured",
        extra={"plugins": [p.name for p in plugins]},
    )
    return app
