from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from starlette.requests import Request

from prism.errors import ConfigurationError
from prism.security.backend import Backend

if TYPE_CHECKING:
    from prism.api.plugin import Plugin

logger = logging.getLogger(__name__)

Decode = Callable[[str], Awaitable[Any]]


class Security:
    """Authenticates requests carrying a bearer token on behalf of a prism ``Plugin``.

    ``decode`` turns a raw token into claims (or raises ``ValueError``); the
    registered backend then decides whether those claims identify someone.
    """

    def __init__(self, decode: Decode) -> None:
        self.decode = decode
        self.backend: Backend | None = None
        self._plugin: Plugin | None = None

    def attach(self, plugin: Plugin) -> None:
        self._plugin = plugin
        if self.backend is not None:
            plugin.register_filter(self.backend.filters)

    def register_backend(self, backend: Backend) -> None:
        if self.backend is not None:
            raise ConfigurationError("A Backend has already been registered")
        self.backend = backend
        if self._plugin is not None:
            self._plugin.register_filter(backend.filters)
        logger.info("Registered security backend %s", type(backend).__name__)

    def ensure_backend(self) -> None:
        if self.backend is None:
            raise ConfigurationError("No Backend registered")

    async def authenticate(self, request: Request) -> dict[str, Any] | None:
        scheme, _, token = request.headers.get("authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token or self.backend is None:
            return None

        try:
            decoded = await self.decode(token)
        except ValueError:
            logger.debug("Rejected undecodable bearer token")
            return None

        result = await self.backend.validate(decoded)
        if result is False or result is True:
            return None
        return dict(result)
