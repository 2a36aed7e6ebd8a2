from __future__ import annotations

from typing import Any

from prism.action.base import ResourceAction
from prism.core.context import Context, Params
from prism.core.document import Document
from prism.core.query import Create
from prism.core.resource import Resource
from prism.core.schema import validate


class CreateItem(ResourceAction):
    kind = "create_item"
    method = "POST"

    def __init__(self, resource: Resource) -> None:
        super().__init__(resource)
        self.path = resource.name

    def query(self, params: Params, context: Context) -> Create:
        return Create(source=self.resource.name, schema=self.resource.schema, data=dict(context.payload or {}))

    async def handle(self, params: Params, context: Context) -> Any:
        validate(context.payload, self.resource.schema)
        query = self.behavior("query")(params, context)  # type: ignore[misc]
        return await self.resource.source.create(query)

    async def decorate(self, document: Document, params: Params, context: Context) -> Document:
        return self.embed_related(document)
