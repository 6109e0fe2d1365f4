"""Application-level exception types for crudbus."""

from __future__ import annotations


class CrudBusError(Exception):
    """Base exception for crudbus."""


class ConfigurationError(CrudBusError):
    """Base exception for wiring and endpoint configuration errors."""


class SchemaKeyMissingError(ConfigurationError):
    """Raised when an owner has no endpoint template for a command kind."""

    def __init__(self, owner_id: str, key: str) -> None:
        super().__init__(f"Owner '{owner_id}' has no '{key}' endpoint template")
        self.owner_id = owner_id
        self.key = key


class UrlTemplateError(ConfigurationError):
    """Raised when an endpoint template references a missing parameter."""

    def __init__(self, template: str, name: str) -> None:
        super().__init__(f"Template '{template}' needs parameter '{name}'")
        self.template = template
        self.name = name


class TransportError(CrudBusError):
    """Raised when a request could not be completed."""


class HttpStatusError(TransportError):
    """Raised when the remote service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
