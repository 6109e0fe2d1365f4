"""Core data shapes shared by the bus, the mediator and the REST client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, Field

from crudbus.errors import SchemaKeyMissingError

Params: TypeAlias = dict[str, Any]
Record: TypeAlias = Any


class Status(str, Enum):
    """Envelope status values."""

    INIT = "init"
    OK = "ok"
    ERROR = "error"


class Envelope(BaseModel):
    """Normalized result of one CRUD operation."""

    status: str = Status.OK
    items: list[Record] = Field(default_factory=list)

    @classmethod
    def init(cls) -> Envelope:
        return cls(status=Status.INIT, items=[])

    @classmethod
    def error(cls, message: str | None = None) -> Envelope:
        if message is None:
            return cls(status=Status.ERROR, items=[])
        return cls(status=Status.ERROR, items=[{"message": message}])

    @property
    def ok(self) -> bool:
        return self.status == Status.OK


@dataclass(frozen=True)
class Owner:
    """Resource group a message belongs to, with its endpoint templates."""

    id: str
    schema: Mapping[str, str] = field(default_factory=dict)

    def endpoint(self, key: str) -> str:
        try:
            return self.schema[key]
        except KeyError:
            raise SchemaKeyMissingError(self.id, key) from None
