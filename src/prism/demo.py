"""A small task-tracking API used by the CLI and as a usage example."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from prism.action import CreateItem, DeleteItem, ReadCollection, ReadItem, UpdateItem
from prism.api.plugin import Plugin
from prism.core.resource import Relationship, Resource
from prism.source.memory import InMemorySource


def _schema(title: str, properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "$schema": "http://json-schema.org/draft-04/schema#",
        "title": title,
        "type": "object",
        "properties": properties,
        "required": required,
    }


def seed() -> dict[str, list[dict[str, Any]]]:
    return {
        "departments": [{"id": "department1", "name": "Engineering"}],
        "users": [
            {"id": "user1", "name": "Ada", "department": "department1"},
            {"id": "user2", "name": "Grace", "department": "department1"},
        ],
        "projects": [{"id": "project1", "name": "Prism"}],
        "tasks": [
            {"id": f"task{i}", "title": f"Task {i}", "owner": f"user{i % 2 + 1}", "project": "project1"}
            for i in range(1, 6)
        ],
    }


def resources(source: InMemorySource) -> list[Resource]:
    string = {"type": "string"}
    return [
        Resource(name="departments", source=source, schema=_schema("department", {"name": string}, ["name"])),
        Resource(
            name="users",
            source=source,
            schema=_schema("user", {"name": string, "department": string}, ["name"]),
            relationships=[Relationship(name="departments", from_field="department")],
        ),
        Resource(name="projects", source=source, schema=_schema("project", {"name": string}, ["name"])),
        Resource(
            name="tasks",
            source=source,
            schema=_schema("task", {"title": string, "owner": string, "project": string}, ["title"]),
            relationships=[
                Relationship(name="users", from_field="owner"),
                Relationship(name="projects", from_field="project"),
            ],
            page_size=2,
        ),
    ]


def create_app(root: str = "/", source: InMemorySource | None = None) -> FastAPI:
    app = FastAPI(title="Prism demo API", version="0.1.0")
    plugin = Plugin(app, root=root, secure=False)
    for resource in resources(source or InMemorySource(seed())):
        plugin.register_action(
            [
                ReadCollection(resource),
                ReadItem(resource),
                CreateItem(resource),
                UpdateItem(resource),
                DeleteItem(resource),
            ]
        )
    app.state.prism = plugin
    return app
