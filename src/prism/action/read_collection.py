from __future__ import annotations

import math
from typing import Any

from prism.action.base import READ_COLLECTION, ResourceAction
from prism.action.read_item import ReadItem
from prism.action.root import Root
from prism.core.action import Action
from prism.core.context import Context, Params
from prism.core.document import CollectionDocument, Document, Link
from prism.core.filter import Filter
from prism.core.query import Join, Page, Read, conditions_from, order_from, page_number
from prism.core.registry import Registry
from prism.core.resource import Relationship, Resource


class ReadCollection(ResourceAction):
    """Reads a page of a resource, filtered by ``where`` and sorted by ``order``."""

    kind = READ_COLLECTION
    method = "GET"

    def __init__(self, resource: Resource) -> None:
        super().__init__(resource)
        self.path = f"{resource.name}{{?where,order,page}}"

    @property
    def filters(self) -> list[Filter]:
        filters = [Filter(type=Root, name="decorate", filter=self._link_from_root)]
        for rel in self.resource.relationships:
            filters.append(
                Filter(
                    type=ReadItem,
                    name="decorate",
                    where=lambda action, rel=rel: getattr(getattr(action, "resource", None), "name", None) == rel.name,
                    filter=lambda next, action, registry, rel=rel: self._link_from_parent(next, rel),
                )
            )
        return filters

    def query(self, params: Params, context: Context) -> Read:
        joins = self.behavior("joins")
        return Read(
            source=self.resource.name,
            schema=self.resource.schema,
            returns="collection",
            conditions=conditions_from(params.get("where")),
            joins=joins(params, context) if joins else [],
            order=order_from(params.get("order")),
            page=Page(number=page_number(params.get("page")), size=self.resource.page_size),
        )

    def joins(self, params: Params, context: Context) -> list[Join]:
        return self.resolve_joins(params, context)

    async def handle(self, params: Params, context: Context) -> Any:
        query = self.behavior("query")(params, context)  # type: ignore[misc]
        return await self.resource.source.read(query)

    async def decorate(self, document: Document, params: Params, context: Context) -> Document:
        if isinstance(document, CollectionDocument):
            for item in document.items:
                document.embed(self.resource.name, self.embed_related(Document(dict(item))), many=True)
            self._paginate(document, page_number(params.get("page")), document.count)
        return document

    def _paginate(self, document: Document, page: int, count: int) -> None:
        last = math.ceil(count / self.resource.page_size)

        def link(rel: str, number: int) -> Link:
            return Link(rel=rel, href=self.path, params={"page": number})

        if page > 1:
            document.links.append(link("first", 1))
            document.links.append(link("prev", page - 1))
        if page < last:
            document.links.append(link("next", page + 1))
            document.links.append(link("last", last))

    def _link_from_root(self, next: Any, action: Action, registry: Registry) -> Any:
        async def decorate(document: Document, params: Params, context: Context) -> Document:
            document = await next(document, params, context)
            document.links.append(Link(rel=self.resource.name, href=self.path, name="collection"))
            return document

        return decorate

    def _link_from_parent(self, next: Any, rel: Relationship) -> Any:
        async def decorate(document: Document, params: Params, context: Context) -> Document:
            document = await next(document, params, context)
            document.links.append(
                Link(
                    rel=self.resource.name,
                    href=self.path,
                    name="collection",
                    params={"where": {rel.from_field: document.properties.get(rel.to_field)}},
                )
            )
            return document

        return decorate
