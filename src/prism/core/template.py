"""Expansion of the small URI template subset used by action paths.

Two expression forms are understood:

* ``{name}``: a single path segment, percent-encoded.
* ``{?a,b}``: a query component built from the named variables that are set.

Mapping values in a query component are flattened into ``key,value`` pairs so
that ``where={"owner": "user1"}`` becomes ``where=owner,user1``; the dispatch
adapter folds such values back into mappings.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

_EXPRESSION = re.compile(r"{(\??)([^}]*)}")


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


def _flatten(value: Any) -> str:
    if isinstance(value, Mapping):
        return ",".join(f"{_encode(k)},{_encode(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ",".join(_encode(v) for v in value)
    return _encode(value)


def expand(template: str, values: Mapping[str, Any]) -> str:
    def _replace(match: re.Match[str]) -> str:
        operator, names = match.group(1), match.group(2).split(",")
        if not operator:
            value = values.get(names[0])
            return "" if value is None else _encode(value)

        pairs = [f"{name}={_flatten(values[name])}" for name in names if values.get(name) not in (None, {}, [])]
        return "?" + "&".join(pairs) if pairs else ""

    return _EXPRESSION.sub(_replace, template)


def dequery(path: str) -> str:
    """Strip ``{?...}`` query expressions so the path can be handed to a router."""
    return re.sub(r"{\?.*?}", "", path)
