from __future__ import annotations

from typing import Any

from prism.core.action import Action
from prism.core.context import Context, Params
from prism.core.document import Document


class Root(Action):
    """Entry point of the API; collections link themselves here through filters."""

    kind = "root"
    method = "GET"
    path = ""

    async def handle(self, params: Params, context: Context) -> Any:
        return {}

    async def decorate(self, document: Document, params: Params, context: Context) -> Document:
        return document
