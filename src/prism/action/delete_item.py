from __future__ import annotations

from typing import Any

from fastapi import Response, status

from prism.action.base import ResourceAction
from prism.core.context import Context, Params
from prism.core.query import Delete
from prism.core.resource import Resource


class DeleteItem(ResourceAction):
    kind = "delete_item"
    method = "DELETE"

    def __init__(self, resource: Resource) -> None:
        super().__init__(resource)
        self.path = self.item_path

    def query(self, params: Params, context: Context) -> Delete:
        return Delete(source=self.resource.name, schema=self.resource.schema, conditions=self.key_conditions(params))

    async def handle(self, params: Params, context: Context) -> Any:
        query = self.behavior("query")(params, context)  # type: ignore[misc]
        await self.resource.source.delete(query)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
