"""Security backend that authenticates against rows of a prism ``Resource``.

Hashing and comparison of passwords are injected; this module never touches
cryptography itself.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from fastapi import HTTPException, status

from prism.action.create_item import CreateItem
from prism.action.read_collection import ReadCollection
from prism.action.read_item import ReadItem
from prism.action.root import Root
from prism.action.update_item import UpdateItem
from prism.core.action import Action
from prism.core.context import Context, Params
from prism.core.document import CollectionDocument, Document, Link
from prism.core.filter import Filter
from prism.core.query import Condition, Read
from prism.core.registry import Registry
from prism.core.resource import Resource
from prism.core.schema import validate

logger = logging.getLogger(__name__)

Hash = Callable[[str], Awaitable[str]]
Compare = Callable[[str, str], Awaitable[bool]]


class Backend(Protocol):
    filters: list[Filter]

    async def issue(self, payload: Any) -> dict[str, Any] | bool: ...

    async def validate(self, decoded: Any, context: Context | None = None) -> dict[str, Any] | bool: ...


class ResourceBackend:
    def __init__(
        self,
        resource: Resource,
        *,
        hash: Hash,
        compare: Compare,
        identity: str = "username",
        password: str = "password",
        redact: str = "**REDACTED**",
        scope: list[Condition] | None = None,
    ) -> None:
        self.resource = resource
        self.hash = hash
        self.compare = compare
        self.identity = identity
        self.password = password
        self.redact = redact
        self.scope = list(scope or [])
        self.schema: dict[str, Any] = {
            "$schema": "http://json-schema.org/draft-04/schema#",
            "title": "token",
            "type": "object",
            "properties": {identity: {"type": "string"}, password: {"type": "string"}},
            "required": [identity, password],
        }
        self.filters = [
            Filter(
                type=[ReadItem, ReadCollection, CreateItem, UpdateItem], name="decorate", filter=self._redact_password
            ),
            Filter(type=[CreateItem, UpdateItem], name="handle", where=self._bound, filter=self._hash_password),
            Filter(type=Root, name="decorate", filter=self._link_identity),
        ]

    async def issue(self, payload: Any) -> dict[str, Any] | bool:
        """Check submitted credentials; return the identity claims, or ``False`` when they do not match.

        No route calls this: hosts expose it through their own token endpoint
        and sign the returned claims with whatever scheme ``decode`` expects.
        """
        validate(payload, self.schema)
        conditions = [Condition(field=self.identity, value=payload[self.identity]), *self.scope]
        try:
            row = await self.resource.source.read(self._read(conditions))
        except HTTPException as exc:
            if exc.status_code != status.HTTP_404_NOT_FOUND:
                raise
            # TODO: unknown identities return faster than wrong passwords; compare against a dummy hash instead.
            return False

        if not await self.compare(payload[self.password], row[self.password]):  # type: ignore[index]
            return False
        return {self.resource.name: {key: row[key] for key in self.resource.primary_keys}}  # type: ignore[index]

    async def validate(self, decoded: Any, context: Context | None = None) -> dict[str, Any] | bool:
        try:
            claims = decoded[self.resource.name]
            conditions = [Condition(field=key, value=claims[key]) for key in self.resource.primary_keys]
        except (KeyError, TypeError):
            logger.debug("Token claims do not identify a %s", self.resource.name)
            return False

        try:
            row = await self.resource.source.read(self._read([*conditions, *self.scope]))
        except HTTPException:
            return False
        return dict(row)  # type: ignore[arg-type]

    def _read(self, conditions: list[Condition]) -> Read:
        return Read(source=self.resource.name, schema=self.schema, returns="item", conditions=conditions)

    def _bound(self, action: Action) -> bool:
        return getattr(getattr(action, "resource", None), "name", None) == self.resource.name

    def _redact_password(self, next: Any, action: Action, registry: Registry) -> Any:
        """Redact the password of every document of this resource, at the top level or embedded."""
        bound = self._bound(action)

        async def decorate(document: Document, params: Params, context: Context) -> Document:
            document = await next(document, params, context)
            self._redact(document, bound and not isinstance(document, CollectionDocument))
            return document

        return decorate

    def _redact(self, document: Document, own: bool) -> None:
        if own and self.password in document.properties:
            document.properties[self.password] = self.redact
        for entry in document.embedded:
            self._redact(entry.document, entry.rel == self.resource.name)

    def _hash_password(self, next: Any, action: Action, registry: Registry) -> Any:
        async def handle(params: Params, context: Context) -> Any:
            payload = context.payload
            if isinstance(payload, dict) and payload.get(self.password):
                payload[self.password] = await self.hash(payload[self.password])
            return await next(params, context)

        return handle

    def _link_identity(self, next: Any, action: Action, registry: Registry) -> Any:
        async def decorate(document: Document, params: Params, context: Context) -> Document:
            document = await next(document, params, context)
            if not context.authenticated:
                return document

            found = registry.find_actions(ReadItem, self._bound)
            if not found:
                return document

            credentials = context.credentials or {}
            document.links.append(
                Link(
                    rel=self.resource.name,
                    name="identity",
                    href=found[0].path,
                    params={key: credentials.get(key) for key in self.resource.primary_keys},
                )
            )
            return document

        return decorate
