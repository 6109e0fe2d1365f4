from __future__ import annotations

from functools import partial

import httpx
import pytest
from typer.testing import CliRunner

from crudbus import cli
from crudbus.app import build_mediator

runner = CliRunner()


def _route_to(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    monkeypatch.setattr(cli, "build_mediator", partial(build_mediator, client=client))


def test_new_prints_init_change() -> None:
    result = runner.invoke(cli.app, ["call", "new", "--log-level", "ERROR"])

    assert result.exit_code == 0
    assert "data.changed" in result.stdout
    assert '"init"' in result.stdout


def test_read_prints_done_and_changed(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"status": "ok", "items": [{"id": 7}]})

    _route_to(monkeypatch, handler)

    result = runner.invoke(
        cli.app,
        ["call", "read", "-t", "articles/{id}", "-p", "id=7", "--base-url", "http://api.test", "--log-level", "ERROR"],
    )

    assert result.exit_code == 0
    assert seen == ["http://api.test/articles/7"]
    assert result.stdout.index("data.read_done") < result.stdout.index("data.changed")


def test_remote_error_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    _route_to(monkeypatch, lambda request: httpx.Response(500, json={"detail": "boom"}))

    result = runner.invoke(
        cli.app,
        ["call", "create", "-t", "http://api.test/articles", "-d", '{"title": "x"}', "--log-level", "ERROR"],
    )

    assert result.exit_code == 1
    assert "data.error" in result.stdout
    assert "POST /articles -> 500: boom" in result.stdout


def test_bad_param_is_rejected() -> None:
    result = runner.invoke(cli.app, ["call", "read", "-t", "articles", "-p", "novalue", "--log-level", "ERROR"])

    assert result.exit_code != 0
