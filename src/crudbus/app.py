"""Runtime bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from crudbus.bus import MessageBus
from crudbus.config import Settings
from crudbus.http import RestClient
from crudbus.mediator import StoreCrudMediator
from crudbus.url_builder import UrlBuilder


@dataclass
class CrudRuntime:
    """Wired bus, REST client and mediator for one process."""

    settings: Settings
    bus: MessageBus
    client: RestClient
    url_builder: UrlBuilder
    mediator: StoreCrudMediator

    async def aclose(self) -> None:
        self.mediator.close()
        await self.bus.join()
        await self.client.aclose()

    async def __aenter__(self) -> CrudRuntime:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_mediator(
    settings: Settings,
    *,
    bus: MessageBus | None = None,
    client: httpx.AsyncClient | None = None,
) -> CrudRuntime:
    """Build a runtime from settings; pass ``client`` to reuse an existing httpx client."""

    bus = bus or MessageBus()
    rest = RestClient(client, timeout_s=settings.timeout_seconds, headers=settings.headers)
    url_builder = UrlBuilder(settings.base_url)
    mediator = StoreCrudMediator(bus, rest, url_builder)
    return CrudRuntime(settings=settings, bus=bus, client=rest, url_builder=url_builder, mediator=mediator)
