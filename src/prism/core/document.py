"""Hypermedia document model.

A ``Document`` is built fresh for every response (and for every embedded
item), decorated by action behaviors and finally rendered into a HAL-style
mapping. Rendering reads the current state and never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from prism.core.context import Context, Params
from prism.core.query import Collection
from prism.core.template import expand


@dataclass
class Link:
    rel: str
    href: str
    name: str | None = None
    params: Params | None = None
    public: bool = False

    def render(self, params: Params) -> dict[str, Any]:
        rendered: dict[str, Any] = {"href": expand(self.href, {**params, **(self.params or {})})}
        if self.name is not None:
            rendered["name"] = self.name
        return rendered


@dataclass
class Embedded:
    rel: str
    document: Document
    many: bool = False


@dataclass
class Document:
    properties: dict[str, Any] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)
    embedded: list[Embedded] = field(default_factory=list)
    omit: list[str] = field(default_factory=list)

    @staticmethod
    def from_result(result: Any) -> Document:
        """Pick the document variant matching a data-source result."""
        if isinstance(result, Collection):
            return CollectionDocument(result)
        return Document(dict(result or {}))

    def hide(self, name: str) -> None:
        if name not in self.omit:
            self.omit.append(name)

    def embed(self, rel: str, document: Document, *, many: bool = False) -> None:
        self.embedded.append(Embedded(rel=rel, document=document, many=many))

    def render(self, params: Params, context: Context | None = None) -> dict[str, Any]:
        rendered = {key: value for key, value in self.properties.items() if key not in self.omit}

        links: dict[str, Any] = {}
        for link in self.links:
            if context is not None and context.secure and not context.authenticated and not link.public:
                continue
            _place(links, link.rel, link.render(params), many=False)
        if links:
            rendered["_links"] = links

        embedded: dict[str, Any] = {}
        for entry in self.embedded:
            _place(embedded, entry.rel, entry.document.render({}, context), many=entry.many)
        if embedded:
            rendered["_embedded"] = embedded

        return rendered


class CollectionDocument(Document):
    """Document for a ``Collection`` result; the raw ``items`` are never rendered."""

    def __init__(self, collection: Collection) -> None:
        super().__init__(properties={"items": list(collection.items), "count": collection.count})
        self.hide("items")

    @property
    def items(self) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = self.properties["items"]
        return items

    @property
    def count(self) -> int:
        return int(self.properties["count"])


def _place(target: dict[str, Any], rel: str, value: Any, *, many: bool) -> None:
    if many:
        existing = target.setdefault(rel, [])
        if not isinstance(existing, list):
            target[rel] = existing = [existing]
        existing.append(value)
    elif rel not in target:
        target[rel] = value
    elif isinstance(target[rel], list):
        target[rel].append(value)
    else:
        target[rel] = [target[rel], value]
