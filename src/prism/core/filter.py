"""Filters: declarative interceptors wrapping one named behavior of matching actions.

A filter's ``filter`` callable is invoked as ``filter(next, action, registry)``
and must return a callable with the same signature as the behavior it wraps
(a coroutine function for ``handle`` and ``decorate``). The returned callable
decides whether and when to call ``next``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from prism.core.action import BEHAVIORS, Action

if TYPE_CHECKING:
    from prism.core.registry import Registry

Behavior = Callable[..., Any]
Wrapper = Callable[..., Behavior]
Predicate = Callable[[Action], bool]
KindSpec = str | type[Action] | Iterable[str | type[Action]]


def _always(_action: Action) -> bool:
    return True


def kinds_of(kinds: KindSpec) -> frozenset[str]:
    """Normalise a kind tag, an action class, or a collection of either into a set of tags."""
    if isinstance(kinds, str):
        return frozenset({kinds})
    if isinstance(kinds, type):
        return frozenset({kinds.kind})
    return frozenset(kind for item in kinds for kind in kinds_of(item))


@dataclass
class Filter:
    type: KindSpec
    name: str
    filter: Wrapper
    where: Predicate = field(default=_always)

    def __post_init__(self) -> None:
        if self.name not in BEHAVIORS:
            raise ValueError(f"Unknown behavior {self.name!r}; expected one of {', '.join(BEHAVIORS)}")
        self.kinds = kinds_of(self.type)

    def matches(self, action: Action, name: str) -> bool:
        return self.name == name and action.kind in self.kinds and bool(self.where(action))


def weave(original: Behavior, filters: list[Filter], action: Action, registry: Registry) -> Behavior:
    """Fold ``filters`` around ``original``; the first filter ends up outermost."""
    chain = original
    for item in reversed(filters):
        chain = item.filter(chain, action, registry)
    return chain
