"""Plain value types describing create/read/update/delete intents.

These are handed to a data source unchanged; nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Item = dict[str, Any]
Returns = Literal["item", "collection"]


@dataclass(frozen=True)
class Condition:
    field: str
    value: Any


@dataclass(frozen=True)
class Join:
    source: str
    path: tuple[str, ...]
    from_field: str
    to_field: str

    def reparent(self, parent: str) -> Join:
        """Return a copy of this join positioned one level deeper, under ``parent``."""
        return Join(source=self.source, path=(parent, *self.path), from_field=self.from_field, to_field=self.to_field)


@dataclass(frozen=True)
class Order:
    field: str
    direction: str = "asc"


@dataclass(frozen=True)
class Page:
    number: int = 1
    size: int = 20


@dataclass
class Read:
    source: str
    schema: dict[str, Any]
    returns: Returns
    conditions: list[Condition] = field(default_factory=list)
    joins: list[Join] = field(default_factory=list)
    order: list[Order] = field(default_factory=list)
    page: Page | None = None


@dataclass
class Create:
    source: str
    schema: dict[str, Any]
    data: dict[str, Any]
    returns: Returns = "item"


@dataclass
class Update:
    source: str
    schema: dict[str, Any]
    data: dict[str, Any]
    conditions: list[Condition] = field(default_factory=list)
    returns: Returns = "item"


@dataclass
class Delete:
    source: str
    schema: dict[str, Any]
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class Collection:
    """A page of items together with the total number of matching items."""

    items: list[Item]
    count: int


def conditions_from(where: Any) -> list[Condition]:
    if not isinstance(where, dict):
        return []
    return [Condition(field=str(key), value=value) for key, value in where.items()]


def order_from(order: Any) -> list[Order]:
    if not isinstance(order, dict):
        return []
    return [Order(field=str(key), direction=str(direction)) for key, direction in order.items()]


def page_number(raw: Any) -> int:
    """Parse a requested page number; anything unparseable or below 1 means page 1."""
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        return 1
