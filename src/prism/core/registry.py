from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from prism.core.action import Action
from prism.core.filter import Filter, KindSpec, kinds_of, weave

logger = logging.getLogger(__name__)


class Registry:
    """Ordered store of actions and filters.

    Action order is the order used for relationship discovery; filter order is
    the composition order of woven chains. Registration and lookup are not
    expected to interleave with serving.
    """

    def __init__(self) -> None:
        self.actions: list[Action] = []
        self.filters: list[Filter] = []
        self.woven = False

    def register_action(self, action: Action | Iterable[Action]) -> None:
        if not isinstance(action, Action):
            for item in action:
                self.register_action(item)
            return

        action.bind(self)
        self.actions.append(action)
        self.register_filter(action.filters)

    def register_filter(self, filter: Filter | Iterable[Filter]) -> None:
        if not isinstance(filter, Filter):
            for item in filter:
                self.register_filter(item)
            return

        if self.woven:
            logger.warning("Filter on %r registered after weaving; it is inert until filters are applied again", filter.name)
        self.filters.append(filter)

    def apply_filters(self) -> None:
        """Weave every matching filter into every behavior of every registered action.

        Chains are always folded from the unwrapped behaviors, so applying again
        after registering more filters rebuilds them instead of double-wrapping.
        """
        for action in self.actions:
            action.woven = {}
            for name in action.behaviors():
                matching = [item for item in self.filters if item.matches(action, name)]
                if not matching:
                    continue
                action.woven[name] = weave(getattr(action, name), matching, action, self)
                logger.debug("Wove %d filter(s) into %r.%s", len(matching), action, name)
        self.woven = True

    def find_actions(self, types: KindSpec, predicate: Callable[[Action], bool] | None = None) -> list[Action]:
        kinds = kinds_of(types)
        return [
            action
            for action in self.actions
            if action.kind in kinds and (predicate is None or predicate(action))
        ]
