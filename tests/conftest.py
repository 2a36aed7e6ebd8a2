"""Shared fixtures: a small task tracker spread over four related resources."""

from typing import Any

import pytest

from prism.core.registry import Registry
from prism.core.resource import Relationship, Resource
from prism.source.memory import InMemorySource


def _rows() -> dict[str, list[dict[str, Any]]]:
    return {
        "departments": [{"id": "department1", "name": "Engineering"}, {"id": "department2", "name": "Sales"}],
        "users": [
            {"id": "user1", "name": "Test User 1", "department": "department1", "password": "hashed:secret"},
            {"id": "user2", "name": "Test User 2", "department": "department2", "password": "hashed:other"},
        ],
        "projects": [{"id": "project1", "name": "Test Project 1"}, {"id": "project2", "name": "Test Project 2"}],
        "tasks": [
            {"id": "task1", "owner": "user1", "project": "project1"},
            {"id": "task2", "owner": "user2", "project": "project2"},
            {"id": "task3", "owner": "user1", "project": "project2"},
        ],
    }


@pytest.fixture
def source() -> InMemorySource:
    return InMemorySource(_rows())


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def departments(source: InMemorySource) -> Resource:
    return Resource(name="departments", source=source)


@pytest.fixture
def users(source: InMemorySource) -> Resource:
    return Resource(
        name="users",
        source=source,
        schema={
            "type": "object",
            "properties": {"name": {"type": "string"}, "password": {"type": "string"}},
            "required": ["name"],
        },
        relationships=[Relationship(name="departments", from_field="department")],
    )


@pytest.fixture
def projects(source: InMemorySource) -> Resource:
    return Resource(name="projects", source=source)


@pytest.fixture
def tasks(source: InMemorySource) -> Resource:
    return Resource(
        name="tasks",
        source=source,
        schema={
            "type": "object",
            "properties": {"owner": {"type": "string"}, "project": {"type": "string"}},
            "required": ["owner"],
        },
        relationships=[
            Relationship(name="users", from_field="owner"),
            Relationship(name="projects", from_field="project"),
        ],
    )
