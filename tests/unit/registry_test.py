"""Tests for filter weaving and action lookup in the Registry."""

from __future__ import annotations

from typing import Any

import pytest

from prism.action import ReadCollection, ReadItem, Root
from prism.core.action import Action
from prism.core.context import Context
from prism.core.filter import Filter, kinds_of
from prism.core.registry import Registry
from prism.core.resource import Resource


class Echo(Action):
    kind = "echo"

    def __init__(self, label: str = "echo") -> None:
        super().__init__()
        self.label = label

    async def handle(self, params: dict[str, Any], context: Context) -> list[str]:
        return [f"{self.label}:handle"]


class Silent(Action):
    kind = "silent"


def _tracing(tag: str, calls: list[str]) -> Filter:
    def wrap(next: Any, action: Action, registry: Registry) -> Any:
        async def handle(params: dict[str, Any], context: Context) -> list[str]:
            calls.append(f"{tag}:before")
            result = await next(params, context)
            calls.append(f"{tag}:after")
            return [tag, *result]

        return handle

    return Filter(type=Echo, name="handle", filter=wrap)


class TestRegisterAction:
    def test_appends_in_order_and_flattens_sequences(self, registry: Registry) -> None:
        first, second, third = Echo("a"), Echo("b"), Echo("c")
        registry.register_action(first)
        registry.register_action([second, [third]])  # type: ignore[list-item]
        assert registry.actions == [first, second, third]

    def test_binds_registry_to_action(self, registry: Registry) -> None:
        action = Echo()
        registry.register_action(action)
        assert action.registry is registry

    def test_registers_filters_contributed_by_action(self, registry: Registry, tasks: Resource) -> None:
        registry.register_action(ReadCollection(tasks))
        assert [item.name for item in registry.filters] == ["decorate", "decorate", "decorate"]


class TestApplyFilters:
    @pytest.mark.asyncio
    async def test_first_registered_filter_is_outermost(self, registry: Registry) -> None:
        calls: list[str] = []
        action = Echo()
        registry.register_action(action)
        registry.register_filter([_tracing("outer", calls), _tracing("inner", calls)])
        registry.apply_filters()

        result = await action.behavior("handle")({}, Context())  # type: ignore[misc]

        assert result == ["outer", "inner", "echo:handle"]
        assert calls == ["outer:before", "inner:before", "inner:after", "outer:after"]

    @pytest.mark.asyncio
    async def test_original_behavior_is_left_untouched(self, registry: Registry) -> None:
        action = Echo()
        registry.register_action(action)
        registry.register_filter(_tracing("outer", []))
        registry.apply_filters()

        assert await action.handle({}, Context()) == ["echo:handle"]
        assert action.behavior("handle") is action.woven["handle"]

    @pytest.mark.asyncio
    async def test_filter_registered_after_weaving_has_no_effect(self, registry: Registry) -> None:
        action = Echo()
        registry.register_action(action)
        registry.register_filter(_tracing("early", []))
        registry.apply_filters()
        registry.register_filter(_tracing("late", []))

        assert await action.behavior("handle")({}, Context()) == ["early", "echo:handle"]  # type: ignore[misc]

    @pytest.mark.asyncio
    async def test_applying_again_rebuilds_without_double_wrapping(self, registry: Registry) -> None:
        action = Echo()
        registry.register_action(action)
        registry.register_filter(_tracing("outer", []))
        registry.apply_filters()
        registry.apply_filters()

        assert await action.behavior("handle")({}, Context()) == ["outer", "echo:handle"]  # type: ignore[misc]

    def test_missing_behavior_is_never_woven(self, registry: Registry) -> None:
        action = Silent()
        registry.register_action(action)
        registry.register_filter(Filter(type=Silent, name="decorate", filter=lambda next, a, r: next))
        registry.apply_filters()

        assert action.woven == {}
        assert action.behavior("decorate") is None

    @pytest.mark.asyncio
    async def test_where_predicate_limits_matches(self, registry: Registry) -> None:
        kept, skipped = Echo("kept"), Echo("skipped")
        registry.register_action([kept, skipped])
        tracing = _tracing("wrapped", [])
        tracing.where = lambda action: getattr(action, "label", None) == "kept"
        registry.register_filter(tracing)
        registry.apply_filters()

        assert await kept.behavior("handle")({}, Context()) == ["wrapped", "kept:handle"]  # type: ignore[misc]
        assert await skipped.behavior("handle")({}, Context()) == ["skipped:handle"]  # type: ignore[misc]

    def test_filter_receives_action_and_registry(self, registry: Registry) -> None:
        seen: list[tuple[Action, Registry]] = []

        def wrap(next: Any, action: Action, registry: Registry) -> Any:
            seen.append((action, registry))
            return next

        action = Echo()
        registry.register_action(action)
        registry.register_filter(Filter(type=[Echo, Silent], name="handle", filter=wrap))
        registry.apply_filters()

        assert seen == [(action, registry)]


class TestFilter:
    def test_rejects_unknown_behavior(self) -> None:
        with pytest.raises(ValueError, match="Unknown behavior"):
            Filter(type=Echo, name="render", filter=lambda next, a, r: next)

    def test_kinds_accept_tags_classes_and_collections(self) -> None:
        assert kinds_of("echo") == {"echo"}
        assert kinds_of(Root) == {"root"}
        assert kinds_of([ReadItem, "echo", (ReadCollection,)]) == {"read_item", "echo", "read_collection"}


class TestFindActions:
    def test_returns_matches_in_registration_order(self, registry: Registry, tasks: Resource, users: Resource) -> None:
        read_users = ReadCollection(users)
        read_user = ReadItem(users)
        read_tasks = ReadCollection(tasks)
        registry.register_action([read_users, read_user, read_tasks])

        assert registry.find_actions(ReadCollection) == [read_users, read_tasks]
        assert registry.find_actions([ReadItem, ReadCollection]) == [read_users, read_user, read_tasks]

    def test_excludes_actions_failing_predicate(self, registry: Registry, tasks: Resource, users: Resource) -> None:
        read_users = ReadCollection(users)
        registry.register_action([read_users, ReadCollection(tasks)])

        found = registry.find_actions(ReadCollection, lambda action: action.resource.name == "users")  # type: ignore[attr-defined]
        assert found == [read_users]

    def test_empty_registry_finds_nothing(self, registry: Registry) -> None:
        assert registry.find_actions(Root) == []
