from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from prism.errors import ConfigurationError

if TYPE_CHECKING:
    from prism.core.ports.source import Source


@dataclass(frozen=True)
class Relationship:
    """A belongs-to relationship: ``from_field`` on this resource refers to ``to_field`` on ``name``."""

    name: str
    from_field: str
    to_field: str = "id"


@dataclass
class Resource:
    name: str
    source: Source
    schema: dict[str, Any] = field(default_factory=dict)
    primary_keys: list[str] = field(default_factory=lambda: ["id"])
    relationships: list[Relationship] = field(default_factory=list)
    page_size: int = 20

    def __post_init__(self) -> None:
        # The related name is both the join path segment and the key the related row is nested under.
        names = [relationship.name for relationship in self.relationships]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(
                f'Resource "{self.name}" declares more than one relationship to {", ".join(duplicates)}'
            )

    def related(self, name: str) -> list[Relationship]:
        return [relationship for relationship in self.relationships if relationship.name == name]
