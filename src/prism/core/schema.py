"""Payload validation against JSON-Schema resource descriptions."""

from __future__ import annotations

from typing import Any

import jsonschema
from fastapi import HTTPException, status


def validate(payload: Any, schema: dict[str, Any]) -> Any:
    """Return ``payload`` unchanged, or raise a 400 describing the first violation."""
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return payload


def partial(schema: dict[str, Any]) -> dict[str, Any]:
    """A copy of ``schema`` without ``required``, for validating partial updates."""
    return {key: value for key, value in schema.items() if key != "required"}
