"""Utilities for reading and normalizing raw remote results."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from crudbus.types import Envelope, Status


def field_of(raw: Any, key: str, default: Any = None) -> Any:
    """Read a field from mapping-like or attribute-based results."""

    if isinstance(raw, Mapping):
        return raw.get(key, default)
    return getattr(raw, key, default)


def normalize_items(items: Any) -> list[Any]:
    """Convert one items value to a list of records."""

    if items is None:
        return []
    if isinstance(items, (list, tuple)):
        return list(items)
    return [items]


def to_envelope(raw: Any) -> Envelope:
    """Default-fill a raw result into an envelope.

    An absent result becomes an empty ERROR envelope. A missing status means
    OK and missing items mean no records.
    """

    if raw is None:
        return Envelope.error()
    if isinstance(raw, Envelope):
        return raw
    status = field_of(raw, "status")
    items = field_of(raw, "items")
    return Envelope(
        status=Status.OK if status is None else _coerce_status(status),
        items=normalize_items(items),
    )


def _coerce_status(value: Any) -> str:
    try:
        return Status(value)
    except ValueError:
        return str(value)
