"""FastAPI integration: routes registered actions and runs the pre-start phase."""

from __future__ import annotations

import json
import logging
import posixpath
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field
from starlette.requests import Request

from prism.action.root import Root
from prism.core.action import Action
from prism.core.context import Context, Params
from prism.core.document import Document, Link
from prism.core.filter import Filter
from prism.core.registry import Registry
from prism.core.template import dequery
from prism.errors import ConfigurationError

if TYPE_CHECKING:
    from prism.security.plugin import Security

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class PluginOptions(BaseModel):
    root: str = Field(default="/", description="Path every action is published relative to.")
    secure: bool = Field(
        default=True,
        description=(
            "Require a security collaborator. Root then accepts unauthenticated clients so they can discover "
            "how to authenticate; every other action requires credentials."
        ),
    )


class Plugin:
    def __init__(self, app: FastAPI, **options: Any) -> None:
        self.app = app
        self.options = PluginOptions(**options)
        self.registry = Registry()
        self.security: Security | None = None
        self.started = False

        # Pre-start phase runs before the application's own lifespan.
        inner = app.router.lifespan_context

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[Any]:
            self.start()
            async with inner(app) as state:
                yield state

        app.router.lifespan_context = lifespan

    def start(self) -> None:
        if self.started:
            return

        root = Root()
        if self.options.secure:
            if self.security is None:
                raise ConfigurationError("Secure mode enabled but no security collaborator has been registered.")
            self.security.ensure_backend()
            root.auth = "optional"

        self.register_action(root)
        self.registry.apply_filters()
        self.started = True
        logger.info("Applied %d filter(s) to %d action(s)", len(self.registry.filters), len(self.registry.actions))

    def register_action(self, action: Action | Iterable[Action]) -> None:
        if not isinstance(action, Action):
            for item in action:
                self.register_action(item)
            return

        action.path = posixpath.join(self.options.root, action.path) if action.path else self.options.root
        if self.options.secure and action.auth is None:
            action.auth = "required"

        self.registry.register_action(action)
        route = to_route(action, self)
        self.app.add_api_route(
            route["path"],
            route["handler"],
            methods=[route["method"]],
            **{"response_model": None, **route["config"]},
        )
        logger.info('Action "%s" routed to "%s:%s"', type(action).__name__, route["method"], route["path"])

    def register_filter(self, filter: Filter | Iterable[Filter]) -> None:
        self.registry.register_filter(filter)

    def register_security(self, security: Security) -> None:
        self.security = security
        security.attach(self)

    async def context(self, request: Request) -> Context:
        payload: Any = None
        if request.method in _BODY_METHODS:
            body = await request.body()
            if body:
                try:
                    payload = json.loads(body)
                except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body") from exc

        credentials = None
        if self.options.secure and self.security is not None:
            credentials = await self.security.authenticate(request)

        return Context(request=request, payload=payload, credentials=credentials, secure=self.options.secure)


def to_route(action: Action, plugin: Plugin) -> dict[str, Any]:
    """Build the host route descriptor for ``action``; behaviors are looked up per request, after weaving."""

    async def handler(request: Request) -> Any:
        params = merge_request_parameters(request)
        context = await plugin.context(request)
        if action.auth == "required" and not context.authenticated:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

        handle: Callable[..., Awaitable[Any]] = action.behavior("handle")  # type: ignore[assignment]
        result = await handle(params, context)

        decorate = action.behavior("decorate")
        if decorate is None:
            return result

        document = Document.from_result(result)
        document = await decorate(document, params, context) or document
        document.links.append(Link(rel="self", href=action.path, public=True, params=params))
        return document.render(params, context)

    return {
        "path": dequery(action.path),
        "method": action.method,
        "config": dict(action.route_config),
        "handler": handler,
    }


def merge_request_parameters(request: Request) -> Params:
    """Path parameters overlaid with query parameters; ``a,b,c,d`` values become ``{a: b, c: d}``."""
    query = {key: split_pairs(value) for key, value in request.query_params.items()}
    return {**request.path_params, **query}


def split_pairs(value: str) -> Any:
    if "," not in value:
        return value

    parts = value.split(",")
    if len(parts) % 2:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Expected key,value pairs but got an odd number of parts in {value!r}",
        )
    return dict(zip(parts[::2], parts[1::2]))
