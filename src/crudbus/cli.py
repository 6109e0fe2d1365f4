"""Developer CLI: send one CRUD command over the bus and print the resulting events."""

from __future__ import annotations

import asyncio
import json
from enum import Enum
from typing import Any, Optional

import typer
from rich.console import Console

from crudbus.app import build_mediator
from crudbus.config import Settings, get_settings
from crudbus.messages import (
    COMMAND_CLASSES,
    Command,
    CommandCreate,
    CommandUpdate,
    CrudEventType,
    DataEvent,
    ErrorDataEvent,
)
from crudbus.types import Owner

app = typer.Typer(
    name="crudbus",
    help="Mediate CRUD commands between a message bus and a REST API.",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Mediate CRUD commands between a message bus and a REST API."""


class CommandKind(str, Enum):
    NEW = "new"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def event_type(self) -> CrudEventType:
        return CrudEventType(f"command.{self.value}")


def _parse_params(values: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got '{value}'", param_hint="--param")
        params[key] = raw
    return params


def _parse_payload(data: Optional[str]) -> Any:
    if data is None:
        return None
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--data") from exc


def _build_command(kind: CommandKind, owner: Owner, params: dict[str, str], payload: Any) -> Command:
    command_class = COMMAND_CLASSES[kind.event_type]
    if command_class in (CommandCreate, CommandUpdate):
        return command_class(owner=owner, params=params, payload=payload)
    return command_class(owner=owner, params=params)


async def _run(settings: Settings, command: Command, console: Console) -> bool:
    events: list[DataEvent] = []
    async with build_mediator(settings) as runtime:
        runtime.bus.subscribe_to_all(lambda message: events.append(message) if isinstance(message, DataEvent) else None)
        runtime.bus.publish(command)
        await runtime.bus.join()

    for event in events:
        console.print(f"[bold]{event.topic}[/bold]")
        console.print_json(json.dumps(event.model_dump(mode="json", exclude={"owner"})))
    return not any(isinstance(event, ErrorDataEvent) for event in events)


@app.command("call")
def call(
    kind: CommandKind = typer.Argument(..., help="Command to send"),
    template: str = typer.Option("", "--template", "-t", help="Endpoint template for this command"),
    owner_id: str = typer.Option("cli", "--owner", help="Owner identifier"),
    param: list[str] = typer.Option([], "--param", "-p", help="Request parameter as key=value"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON payload for create/update"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Base URL for relative templates"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level override"),
) -> None:
    """Publish one command, wait for the mediator and print every event."""

    settings = get_settings(base_url=base_url, log_level=log_level)
    schema = {kind.value: template} if kind is not CommandKind.NEW else {}
    command = _build_command(kind, Owner(id=owner_id, schema=schema), _parse_params(param), _parse_payload(data))

    ok = asyncio.run(_run(settings, command, Console()))
    if not ok:
        raise typer.Exit(1)
