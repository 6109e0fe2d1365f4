"""Endpoint template resolution."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import quote, urlencode

from crudbus.errors import UrlTemplateError

_PLACEHOLDER = re.compile(r"\{(?P<brace>[A-Za-z_][A-Za-z0-9_]*)\}|(?<![A-Za-z0-9]):(?P<colon>[A-Za-z_][A-Za-z0-9_]*)")
_ABSOLUTE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class UrlBuilderProtocol(Protocol):
    def build(self, template: str, params: Mapping[str, Any] | None = None) -> str: ...


class UrlBuilder:
    """Resolve ``{name}`` and ``:name`` placeholders against command params.

    Params without a placeholder end up in the query string. Relative
    templates are joined onto ``base_url`` when one is configured.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None

    def build(self, template: str, params: Mapping[str, Any] | None = None) -> str:
        params = dict(params or {})
        used: set[str] = set()

        def _substitute(match: re.Match[str]) -> str:
            name = match.group("brace") or match.group("colon")
            if name not in params or params[name] is None:
                raise UrlTemplateError(template, name)
            used.add(name)
            return quote(str(params[name]), safe="")

        path = _PLACEHOLDER.sub(_substitute, template)
        query = [(key, value) for key, value in params.items() if key not in used and value is not None]
        if query:
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{urlencode(query, doseq=True)}"
        return self._join(path)

    def _join(self, path: str) -> str:
        if self.base_url is None or _ABSOLUTE.match(path):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"
