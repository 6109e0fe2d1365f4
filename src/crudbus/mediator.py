"""RESTful CRUD mediator between the message bus and a remote resource API."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from typing import Any, TypeAlias

from loguru import logger

from crudbus.bus import MessageBus, Subscription
from crudbus.envelope import to_envelope
from crudbus.http import HttpClient
from crudbus.messages import (
    ChangeDataEvent,
    Command,
    CommandCreate,
    CommandDelete,
    CommandFailure,
    CommandNew,
    CommandRead,
    CommandUpdate,
    CreateDoneEvent,
    DeleteDoneEvent,
    ErrorDataEvent,
    ReadDoneEvent,
    UpdateDoneEvent,
)
from crudbus.types import Envelope, Owner, Params, Status
from crudbus.url_builder import UrlBuilderProtocol

UNKNOWN_ERROR = "Unknown error"

Inbound: TypeAlias = Command | CommandFailure


class StoreCrudMediator:
    """Translate bus commands into REST calls and results into bus events.

    Each handler issues at most one request. The completion event for a
    command is always published before its DataChanged/DataError event, and
    every failure ends up as an ERROR envelope rather than an exception.
    """

    def __init__(self, bus: MessageBus, http: HttpClient, url_builder: UrlBuilderProtocol) -> None:
        self.bus = bus
        self.http = http
        self.url_builder = url_builder
        logger.info("mediator.start")
        self._subscriptions: list[Subscription] = [
            bus.subscribe(CommandNew, self.create_new),
            bus.subscribe(CommandRead, self.read),
            bus.subscribe(CommandCreate, self.create),
            bus.subscribe(CommandUpdate, self.update),
            bus.subscribe(CommandDelete, self.delete),
        ]

    def close(self) -> None:
        """Detach all command handlers from the bus."""

        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()

    # New
    async def create_new(self, msg: Inbound) -> Envelope:
        envelope = Envelope.init()
        self.bus.publish(ChangeDataEvent(owner=msg.owner, data=envelope))
        return await self.finalize(envelope, msg.owner)

    # Read
    async def _query_read(self, owner: Owner, params: Params) -> Any:
        return await self.http.get(self.url_builder.build(owner.endpoint("read"), params))

    async def read(self, msg: Inbound) -> Envelope:
        if isinstance(msg, CommandFailure):
            return Envelope.error()

        async def pending() -> Any:
            data = await self._query_read(msg.owner, msg.params)
            self.bus.publish(ReadDoneEvent(owner=msg.owner, data=to_envelope(data), params=msg.params))
            return data

        return await self.finalize(pending(), msg.owner)

    # Create
    async def _query_create(self, payload: Any, owner: Owner, params: Params) -> Any:
        return await self.http.post(self.url_builder.build(owner.endpoint("create"), params), payload)

    async def create(self, msg: Inbound) -> Envelope:
        if isinstance(msg, CommandFailure):
            return Envelope.error()

        async def pending() -> Any:
            data = await self._query_create(getattr(msg, "payload", None), msg.owner, msg.params)
            self.bus.publish(CreateDoneEvent(owner=msg.owner, data=to_envelope(data)))
            return data

        return await self.finalize(pending(), msg.owner)

    # Update
    async def _query_update(self, payload: Any, owner: Owner, params: Params) -> Any:
        return await self.http.put(self.url_builder.build(owner.endpoint("update"), params), payload)

    async def update(self, msg: Inbound) -> Envelope:
        if isinstance(msg, CommandFailure):
            return Envelope.error()

        async def pending() -> Any:
            data = await self._query_update(getattr(msg, "payload", None), msg.owner, msg.params)
            self.bus.publish(UpdateDoneEvent(owner=msg.owner, data=to_envelope(data), params=msg.params))
            return data

        return await self.finalize(pending(), msg.owner)

    # Delete
    async def _query_delete(self, owner: Owner, params: Params) -> Any:
        return await self.http.delete(self.url_builder.build(owner.endpoint("delete"), params))

    async def delete(self, msg: Inbound) -> Envelope:
        if isinstance(msg, CommandFailure):
            return Envelope.error()

        async def pending() -> Any:
            data = await self._query_delete(msg.owner, msg.params)
            self.bus.publish(DeleteDoneEvent(owner=msg.owner, data=to_envelope(data), params=msg.params))
            return data

        return await self.finalize(pending(), msg.owner)

    async def finalize(self, data: Any | Awaitable[Any], owner: Owner) -> Envelope:
        """Normalize a result, publish the matching data event and return it."""

        if inspect.isawaitable(data):
            try:
                data = await data
            except Exception as exc:
                logger.opt(exception=exc).warning("mediator.request_failed owner={}", owner.id)
                data = Envelope.error(str(exc) or UNKNOWN_ERROR)

        envelope = to_envelope(data)
        if envelope.status == Status.OK:
            self.bus.publish(ChangeDataEvent(owner=owner, data=envelope))
        elif envelope.status == Status.ERROR:
            self.bus.publish(ErrorDataEvent(owner=owner, data=envelope))
        else:
            logger.debug("mediator.unpublished_status owner={} status={}", owner.id, envelope.status)
        return envelope
