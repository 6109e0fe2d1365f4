from __future__ import annotations

from typing import Any

import pytest

from crudbus.bus import MessageBus
from crudbus.messages import BusMessage, DataEvent
from crudbus.types import Owner
from crudbus.url_builder import UrlBuilder


class FakeHttp:
    """HttpClient double returning queued results or raising queued errors."""

    def __init__(self, result: Any = None, error: BaseException | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str, Any]] = []

    async def _respond(self, method: str, url: str, body: Any = None) -> Any:
        self.calls.append((method, url, body))
        if self.error is not None:
            raise self.error
        return self.result

    async def get(self, url: str) -> Any:
        return await self._respond("GET", url)

    async def post(self, url: str, body: Any = None) -> Any:
        return await self._respond("POST", url, body)

    async def put(self, url: str, body: Any = None) -> Any:
        return await self._respond("PUT", url, body)

    async def delete(self, url: str) -> Any:
        return await self._respond("DELETE", url)


class Recorder:
    """Catch-all subscriber keeping every data event in order."""

    def __init__(self, bus: MessageBus) -> None:
        self.messages: list[BusMessage] = []
        bus.subscribe_to_all(self._record)

    def _record(self, message: BusMessage) -> None:
        if isinstance(message, DataEvent):
            self.messages.append(message)

    @property
    def types(self) -> list[type[BusMessage]]:
        return [type(message) for message in self.messages]


@pytest.fixture
def bus() -> MessageBus:
    return MessageBus()


@pytest.fixture
def recorder(bus: MessageBus) -> Recorder:
    return Recorder(bus)


@pytest.fixture
def owner() -> Owner:
    return Owner(
        id="articles",
        schema={
            "read": "articles/{id}",
            "create": "articles",
            "update": "articles/{id}",
            "delete": "articles/{id}",
        },
    )


@pytest.fixture
def url_builder() -> UrlBuilder:
    return UrlBuilder("https://api.test")
