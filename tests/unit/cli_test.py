"""Tests for the prism CLI."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from prism.cli.app import app
from prism.demo import create_app

runner = CliRunner()


@pytest.mark.parametrize("args", [[], ["serve"], ["routes"]], ids=["root", "serve", "routes"])
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_routes_lists_woven_actions() -> None:
    result = runner.invoke(app, ["routes", "--root", "/v1"])
    assert result.exit_code == 0
    assert "/v1/tasks/{id}" in result.output
    assert "ReadCollection" in result.output
    assert "(21 routes)" in result.output


def test_serve_runs_demo_app_with_uvicorn() -> None:
    with patch("uvicorn.run") as run:
        result = runner.invoke(app, ["serve", "--port", "9000"], env={"PRISM_HOST": "0.0.0.0"})

    assert result.exit_code == 0, result.output
    _, kwargs = run.call_args
    assert kwargs == {"host": "0.0.0.0", "port": 9000}


def test_demo_app_paginates_tasks() -> None:
    with TestClient(create_app()) as client:
        body = client.get("/tasks", params={"page": "2"}).json()

    assert [task["id"] for task in body["_embedded"]["tasks"]] == ["task3", "task4"]
    assert body["_links"]["next"] == {"href": "/tasks?page=3"}
    assert body["_links"]["first"] == {"href": "/tasks?page=1"}
