"""Shared helpers for shop API endpoint modules.

It is internal to cartsync and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from cartsync.exceptions import ShopResponseError

M = TypeVar("M", bound=BaseModel)


def parse_item(model: type[M], data: Any, *, endpoint: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ShopResponseError(
            f"Malformed {model.__name__} from {endpoint}: {exc.error_count()} validation error(s)",
            endpoint=endpoint,
        ) from exc


def parse_item_list(model: type[M], data: Any, *, endpoint: str) -> list[M]:
    """Validate a JSON array of objects into models."""
    if not isinstance(data, list):
        raise ShopResponseError(
            f"Expected a JSON array from {endpoint}, got {type(data).__name__}",
            endpoint=endpoint,
        )
    return [parse_item(model, item, endpoint=endpoint) for item in data]


def parse_optional_item(model: type[M], data: Any, *, endpoint: str) -> M | None:
    """Validate an object body; anything that is not an object yields ``None``."""
    if not isinstance(data, dict):
        return None
    return parse_item(model, data, endpoint=endpoint)
