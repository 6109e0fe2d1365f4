"""Signal-based message bus."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from blinker import Namespace, Signal
from loguru import logger

from crudbus.messages import BusMessage, Topic, normalize_topic

Handler: TypeAlias = Callable[[Any], Awaitable[Any] | Any]
Subscription: TypeAlias = Callable[[], None]


class MessageBus:
    """In-process message bus backed by blinker signals, one per topic.

    Delivery is synchronous. Handlers returning an awaitable are scheduled
    as tasks on the running loop and tracked until they finish, so callers
    can wait for them with ``join()``.
    """

    def __init__(self) -> None:
        self._signals = Namespace()
        self._all = Signal("crudbus.all")
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def subscribe(self, topic: Topic, handler: Handler) -> Subscription:
        return self._connect(self._signals.signal(normalize_topic(topic)), handler)

    def subscribe_to_all(self, handler: Handler) -> Subscription:
        return self._connect(self._all, handler)

    def publish(self, message: BusMessage) -> None:
        topic = message.topic
        logger.debug("bus.publish topic={} owner={}", topic, message.owner.id)
        self._signals.signal(topic).send(self, message=message)
        self._all.send(self, message=message)

    async def join(self) -> None:
        """Wait until every scheduled handler task has finished."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _connect(self, signal: Signal, handler: Handler) -> Subscription:
        def _receiver(sender: Any, *, message: BusMessage) -> None:
            self._dispatch(handler, message)

        signal.connect(_receiver, weak=False)
        return lambda: signal.disconnect(_receiver)

    def _dispatch(self, handler: Handler, message: BusMessage) -> None:
        try:
            result = handler(message)
        except Exception:
            logger.opt(exception=True).warning("bus.handler_failed topic={} handler={}", message.topic, _name_of(handler))
            return
        if not inspect.isawaitable(result):
            return
        try:
            task = asyncio.ensure_future(result, loop=asyncio.get_running_loop())
        except RuntimeError:
            if inspect.iscoroutine(result):
                result.close()
            logger.error("bus.no_running_loop topic={} handler={}", message.topic, _name_of(handler))
            return
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).warning("bus.handler_task_failed")


def _name_of(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
