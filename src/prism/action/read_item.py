from __future__ import annotations

from typing import Any

from prism.action.base import ResourceAction
from prism.core.context import Context, Params
from prism.core.document import Document
from prism.core.query import Join, Read
from prism.core.resource import Resource


class ReadItem(ResourceAction):
    kind = "read_item"
    method = "GET"

    def __init__(self, resource: Resource) -> None:
        super().__init__(resource)
        self.path = self.item_path

    def query(self, params: Params, context: Context) -> Read:
        joins = self.behavior("joins")
        return Read(
            source=self.resource.name,
            schema=self.resource.schema,
            returns="item",
            conditions=self.key_conditions(params),
            joins=joins(params, context) if joins else [],
        )

    def joins(self, params: Params, context: Context) -> list[Join]:
        return self.resolve_joins(params, context)

    async def handle(self, params: Params, context: Context) -> Any:
        query = self.behavior("query")(params, context)  # type: ignore[misc]
        return await self.resource.source.read(query)

    async def decorate(self, document: Document, params: Params, context: Context) -> Document:
        return self.embed_related(document)
