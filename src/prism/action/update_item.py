from __future__ import annotations

from typing import Any

from prism.action.base import ResourceAction
from prism.core.context import Context, Params
from prism.core.document import Document
from prism.core.query import Update
from prism.core.resource import Resource
from prism.core.schema import partial, validate


class UpdateItem(ResourceAction):
    kind = "update_item"
    method = "PATCH"

    def __init__(self, resource: Resource) -> None:
        super().__init__(resource)
        self.path = self.item_path

    def query(self, params: Params, context: Context) -> Update:
        return Update(
            source=self.resource.name,
            schema=self.resource.schema,
            data=dict(context.payload or {}),
            conditions=self.key_conditions(params),
        )

    async def handle(self, params: Params, context: Context) -> Any:
        validate(context.payload, partial(self.resource.schema))
        query = self.behavior("query")(params, context)  # type: ignore[misc]
        return await self.resource.source.update(query)

    async def decorate(self, document: Document, params: Params, context: Context) -> Document:
        return self.embed_related(document)
