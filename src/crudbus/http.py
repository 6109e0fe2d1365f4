"""REST client used by the mediator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import httpx
from loguru import logger

from crudbus.errors import HttpStatusError, TransportError


class HttpClient(Protocol):
    """Minimal async contract the mediator needs from an HTTP client."""

    async def get(self, url: str) -> Any: ...

    async def post(self, url: str, body: Any = None) -> Any: ...

    async def put(self, url: str, body: Any = None) -> Any: ...

    async def delete(self, url: str) -> Any: ...


def _extract_error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text if text else response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail", body.get("message"))
        if detail is None:
            return str(body)
        return str(detail)
    return str(body)


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    request = response.request
    detail = _extract_error_detail(response)
    raise HttpStatusError(
        f"{request.method} {request.url.path} -> {response.status_code}: {detail}",
        response.status_code,
    )


class RestClient:
    """JSON-over-HTTP client backed by ``httpx.AsyncClient``.

    Every call resolves to the decoded JSON body, or ``None`` when the body
    is empty. Non-2xx answers and transport failures raise ``TransportError``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout_s: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=timeout_s, headers=dict(headers or {}))
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> RestClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get(self, url: str) -> Any:
        return await self._request("GET", url)

    async def post(self, url: str, body: Any = None) -> Any:
        return await self._request("POST", url, body)

    async def put(self, url: str, body: Any = None) -> Any:
        return await self._request("PUT", url, body)

    async def delete(self, url: str) -> Any:
        return await self._request("DELETE", url)

    async def _request(self, method: str, url: str, body: Any = None) -> Any:
        logger.debug("http.request method={} url={}", method, url)
        try:
            response = await self._client.request(method, url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        _raise_for_status(response)
        if not response.content:
            return None
        return response.json()
