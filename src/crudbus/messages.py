"""Command and event models exchanged over the bus.

Every message class declares a ``CrudEventType`` tag in ``domain.action``
form. The bus routes on that tag, so the set of commands and events is
closed: a handler subscribed to ``CrudEventType.READ`` receives either a
``CommandRead`` or a ``CommandFailure`` raised in its place.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from crudbus.types import Envelope, Owner, Params

Topic: TypeAlias = "str | Enum | type[BusMessage]"


class DomainEventType(str, Enum):
    """Base class for message tags with ``domain.action`` naming."""

    @property
    def domain(self) -> str:
        return str(self.value).split(".")[0]

    @property
    def action(self) -> str:
        return str(self.value).split(".")[1]


class CrudEventType(DomainEventType):
    NEW = "command.new"
    READ = "command.read"
    CREATE = "command.create"
    UPDATE = "command.update"
    DELETE = "command.delete"

    READ_DONE = "data.read_done"
    CREATE_DONE = "data.create_done"
    UPDATE_DONE = "data.update_done"
    DELETE_DONE = "data.delete_done"
    DATA_CHANGED = "data.changed"
    DATA_ERROR = "data.error"


def normalize_topic(topic: Topic) -> str:
    """Normalize a tag, tag string or message class to its string form."""

    if isinstance(topic, type) and issubclass(topic, BusMessage):
        return topic.get_event_type_value()
    if isinstance(topic, Enum):
        return str(topic.value)
    return str(topic)


class BusMessage(BaseModel):
    """Base class for all messages carried by the bus."""

    event_type: ClassVar[CrudEventType]

    model_config = ConfigDict(frozen=True)

    owner: Owner

    @classmethod
    def get_event_type_value(cls) -> str:
        return normalize_topic(cls.event_type)

    @property
    def topic(self) -> str:
        return self.get_event_type_value()


# Commands


class Command(BusMessage):
    params: Params = Field(default_factory=dict)


class CommandNew(Command):
    event_type = CrudEventType.NEW


class CommandRead(Command):
    event_type = CrudEventType.READ


class CommandCreate(Command):
    event_type = CrudEventType.CREATE
    payload: Any = None


class CommandUpdate(Command):
    event_type = CrudEventType.UPDATE
    payload: Any = None


class CommandDelete(Command):
    event_type = CrudEventType.DELETE


class CommandFailure(BusMessage):
    """A failure delivered on a command topic instead of the command itself."""

    command_type: CrudEventType
    reason: str = ""

    @property
    def topic(self) -> str:
        return normalize_topic(self.command_type)


# Events


class DataEvent(BusMessage):
    data: Envelope


class ReadDoneEvent(DataEvent):
    event_type = CrudEventType.READ_DONE
    params: Params = Field(default_factory=dict)


class CreateDoneEvent(DataEvent):
    event_type = CrudEventType.CREATE_DONE


class UpdateDoneEvent(DataEvent):
    event_type = CrudEventType.UPDATE_DONE
    params: Params = Field(default_factory=dict)


class DeleteDoneEvent(DataEvent):
    event_type = CrudEventType.DELETE_DONE
    params: Params = Field(default_factory=dict)


class ChangeDataEvent(DataEvent):
    event_type = CrudEventType.DATA_CHANGED


class ErrorDataEvent(DataEvent):
    event_type = CrudEventType.DATA_ERROR


COMMAND_CLASSES: dict[CrudEventType, type[Command]] = {
    CrudEventType.NEW: CommandNew,
    CrudEventType.READ: CommandRead,
    CrudEventType.CREATE: CommandCreate,
    CrudEventType.UPDATE: CommandUpdate,
    CrudEventType.DELETE: CommandDelete,
}
