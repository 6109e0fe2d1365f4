"""crudbus - mediate CRUD commands between a message bus and a REST API."""

from .bus import MessageBus
from .http import HttpClient, RestClient
from .mediator import StoreCrudMediator
from .types import Envelope, Owner, Status
from .url_builder import UrlBuilder

__version__ = "0.1.0"

__all__ = ["Envelope", "HttpClient", "MessageBus", "Owner", "RestClient", "Status", "StoreCrudMediator", "UrlBuilder"]
