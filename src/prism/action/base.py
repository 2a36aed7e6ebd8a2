"""Behavior shared by actions bound to a ``Resource``.

Join resolution walks the resource graph through the registry: every
registered ``ReadCollection`` bound to a related resource contributes its own
joins, reparented under the resource asking for them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from prism.core.action import Action
from prism.core.context import Context, Params
from prism.core.document import Document
from prism.core.query import Condition, Join
from prism.core.resource import Resource

logger = logging.getLogger(__name__)

READ_COLLECTION = "read_collection"


class ResourceAction(Action):
    def __init__(self, resource: Resource) -> None:
        super().__init__()
        self.resource = resource

    @property
    def item_path(self) -> str:
        keys = "/".join(f"{{{key}}}" for key in self.resource.primary_keys)
        return f"{self.resource.name}/{keys}"

    def key_conditions(self, params: Params) -> list[Condition]:
        return [Condition(field=key, value=params.get(key)) for key in self.resource.primary_keys]

    def resolve_joins(self, params: Params, context: Context) -> list[Join]:
        """Direct joins of this resource followed by the joins reachable through related collections.

        Related collections contribute through their woven ``joins`` behavior.
        ``context.joining`` holds the resources already on the current path;
        they are not expanded again, which keeps cyclic relationship graphs
        finite. Only the first join for any path is kept.
        """
        name = self.resource.name
        visited = (*context.joining, name)
        joins: list[Join] = []
        seen: set[tuple[str, ...]] = set()

        def add(join: Join) -> None:
            if join.path in seen:
                logger.debug("Skipping duplicate join %s", ".".join(join.path))
                return
            seen.add(join.path)
            joins.append(join)

        for rel in self.resource.relationships:
            add(Join(source=rel.name, path=(name, rel.name), from_field=rel.from_field, to_field=rel.to_field))

        nested = replace(context, joining=visited)
        for rel in self.resource.relationships:
            if rel.name in visited:
                continue
            for related in self._related_collections(rel.name):
                chain = related.behavior("joins")
                if chain is None:
                    continue
                for join in chain(params, nested):
                    add(join.reparent(name))
        return joins

    def _related_collections(self, name: str) -> list[ResourceAction]:
        if self.registry is None:
            return []
        found = self.registry.find_actions(READ_COLLECTION, lambda action: _resource_name(action) == name)
        return [action for action in found if isinstance(action, ResourceAction)]

    def resource_for(self, name: str) -> Resource | None:
        if name == self.resource.name:
            return self.resource
        if self.registry is None:
            return None
        for action in self.registry.actions:
            if _resource_name(action) == name:
                return action.resource  # type: ignore[attr-defined, no-any-return]
        return None

    def embed_related(self, document: Document, resource: Resource | None = None) -> Document:
        """Move nested related objects out of ``document.properties`` into embedded documents."""
        resource = resource or self.resource
        for rel in resource.relationships:
            raw = document.properties.get(rel.name)
            if not isinstance(raw, dict):
                continue
            child = Document(dict(raw))
            related = self.resource_for(rel.name)
            if related is not None:
                self.embed_related(child, related)
            document.embed(rel.name, child)
            document.hide(rel.name)
        return document


def _resource_name(action: Action) -> Any:
    resource = getattr(action, "resource", None)
    return getattr(resource, "name", None)
