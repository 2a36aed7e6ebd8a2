from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Params = dict[str, Any]


@dataclass
class Context:
    """Per-request state handed to every behavior alongside the merged parameters."""

    request: Any = None
    payload: Any = None
    credentials: dict[str, Any] | None = None
    secure: bool = False
    # Resources on the path of the join resolution currently in progress.
    joining: tuple[str, ...] = ()

    @property
    def authenticated(self) -> bool:
        return self.credentials is not None
