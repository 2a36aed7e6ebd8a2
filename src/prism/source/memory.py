"""In-process data source holding rows per resource name.

Implements the ``Source`` protocol closely enough to exercise every query
shape: equality conditions, joins nested along their path, ordering, paging
and primary-key based writes.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from fastapi import HTTPException, status

from prism.core.query import Collection, Condition, Create, Delete, Item, Join, Read, Update

logger = logging.getLogger(__name__)


class InMemorySource:
    def __init__(self, tables: dict[str, list[Item]] | None = None, primary_key: str = "id") -> None:
        self.tables: dict[str, list[Item]] = {name: list(rows) for name, rows in (tables or {}).items()}
        self.primary_key = primary_key
        self._next_id = 1

    async def create(self, query: Create) -> Item:
        row = dict(query.data)
        if self.primary_key not in row:
            row[self.primary_key] = self._generate_id(query.source)
        self.tables.setdefault(query.source, []).append(row)
        logger.debug("Created %s %r", query.source, row[self.primary_key])
        return dict(row)

    async def read(self, query: Read) -> Item | Collection:
        rows = [row for row in self.tables.get(query.source, []) if _matches(row, query.conditions)]
        for order in reversed(query.order):
            rows.sort(key=lambda row, field=order.field: _sort_key(row.get(field)), reverse=order.direction == "desc")

        if query.returns == "item":
            if not rows:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{query.source} not found")
            return self._join(rows[0], query.joins)

        count = len(rows)
        if query.page is not None:
            start = (query.page.number - 1) * query.page.size
            rows = rows[start : start + query.page.size]
        return Collection(items=[self._join(row, query.joins) for row in rows], count=count)

    async def update(self, query: Update) -> Item:
        for row in self.tables.get(query.source, []):
            if _matches(row, query.conditions):
                row.update(query.data)
                return dict(row)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{query.source} not found")

    async def delete(self, query: Delete) -> bool:
        rows = self.tables.get(query.source, [])
        kept = [row for row in rows if not _matches(row, query.conditions)]
        if len(kept) == len(rows):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{query.source} not found")
        self.tables[query.source] = kept
        return True

    def _join(self, row: Item, joins: list[Join]) -> Item:
        result = copy.deepcopy(row)
        for join in joins:
            parent: Any = result
            for name in join.path[1:-1]:
                parent = parent.get(name) if isinstance(parent, dict) else None
            if not isinstance(parent, dict):
                continue
            value = parent.get(join.from_field)
            related = next(
                (other for other in self.tables.get(join.source, []) if other.get(join.to_field) == value),
                None,
            )
            if related is not None:
                parent[join.source] = copy.deepcopy(related)
        return result

    def _generate_id(self, source: str) -> str:
        existing = {str(row.get(self.primary_key)) for row in self.tables.get(source, [])}
        while True:
            candidate = f"{source}{self._next_id}"
            self._next_id += 1
            if candidate not in existing:
                return candidate


def _matches(row: Item, conditions: list[Condition]) -> bool:
    return all(str(row.get(condition.field)) == str(condition.value) for condition in conditions)


def _sort_key(value: Any) -> tuple[bool, str]:
    return (value is None, str(value))
