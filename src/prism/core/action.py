"""Base class for actions: a route descriptor plus up to four behaviors.

Behaviors are plain methods named ``query``, ``joins``, ``handle`` and
``decorate``. ``query`` and ``joins`` are synchronous; ``handle`` and
``decorate`` are coroutine functions. A subclass that does not define a
behavior simply does not have it, and filters targeting it stay inert.

After weaving, the filtered chain for a behavior is stored in ``woven``;
``behavior(name)`` returns the chain when there is one and the original
method otherwise, so the original is only reachable as the innermost link.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from prism.core.filter import Filter
    from prism.core.registry import Registry

BEHAVIORS: tuple[str, ...] = ("query", "joins", "handle", "decorate")


class Action:
    kind: ClassVar[str] = "action"

    path: str = ""
    method: str = "GET"

    def __init__(self) -> None:
        self.route_config: dict[str, Any] = {}
        self.auth: str | None = None
        self.woven: dict[str, Callable[..., Any]] = {}
        self.registry: Registry | None = None

    @property
    def filters(self) -> list[Filter]:
        """Filters this action contributes to the registry it is registered with."""
        return []

    def bind(self, registry: Registry) -> None:
        self.registry = registry

    def behaviors(self) -> list[str]:
        return [name for name in BEHAVIORS if callable(getattr(self, name, None))]

    def behavior(self, name: str) -> Callable[..., Any] | None:
        if name in self.woven:
            return self.woven[name]
        original = getattr(self, name, None)
        return original if callable(original) else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.method} {self.path!r})"
