"""
bastion_core.middleware
~~~~~~~~~~~~~~~~~~~~~~~
Starlette integration: run a plugin on each inbound request.

PluginMiddleware
    Reads ``Authorization``, calls ``plugin.access``.  A ``Reject`` ends
    the request with a JSON 401; a ``Proceed`` has its header mutations
    written into the request scope before the downstream app runs.

install_plugins
    Adds one PluginMiddleware per route binding, ordered by priority.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from bastion_core.auth.decision import Reject
from bastion_core.plugins import Plugin, load_plugin

logger = logging.getLogger(__name__)


def apply_header_mutations(scope: dict[str, Any], headers: dict[str, str | None]) -> None:
    """Set or remove request headers in an ASGI ``scope`` in place."""
    mutable = MutableHeaders(scope=scope)
    for name, value in headers.items():
        if value is None:
            del mutable[name]
        else:
            mutable[name] = value


class PluginMiddleware(BaseHTTPMiddleware):
    """Apply one authentication plugin to every HTTP request."""

    def __init__(self, app: ASGIApp, plugin: Plugin) -> None:
        super().__init__(app)
        self.plugin = plugin

    async def dispatch(self, request: Request, call_next: object) -> Response:
        result = self.plugin.access(request.headers.get("authorization"))

        if isinstance(result, Reject):
            logger.info(
                "Request rejected",
                extra={
                    "plugin": self.plugin.name,
                    "path": request.url.path,
                    "status_code": result.status_code,
                },
            )
            return JSONResponse(result.body(), status_code=result.status_code)

        if result.headers:
            apply_header_mutations(request.scope, result.headers)

        response: Response = await call_next(request)  # type: ignore[operator]
        return response


def install_plugins(app: Any, bindings: Iterable[Any]) -> list[Plugin]:
    """Load and attach plugins described by ``bindings``.

    Each binding has ``name`` and ``config`` attributes (see
    :class:`bastion_core.settings.PluginBinding`).  Higher ``priority``
    runs first; equal priorities keep declaration order.

    Raises:
        PluginConfigError: If any binding fails validation.  Nothing is
            installed in that case.
    """
    plugins = [load_plugin(b.name, dict(b.config)) for b in bindings]
    ordered = sorted(plugins, key=lambda p: -p.priority)
    # add_middleware wraps outermost last, so install lowest priority first.
    for plugin in reversed(ordered):
        app.add_middleware(PluginMiddleware, plugin=plugin)
    return ordered
