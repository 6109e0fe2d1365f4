from __future__ import annotations

from types import SimpleNamespace

from crudbus.envelope import field_of, to_envelope
from crudbus.types import Envelope, Status


def test_field_of_reads_mappings_and_attributes() -> None:
    assert field_of({"status": "ok"}, "status") == "ok"
    assert field_of(SimpleNamespace(items=[1]), "items") == [1]
    assert field_of(object(), "status", "fallback") == "fallback"


def test_to_envelope_fills_defaults() -> None:
    assert to_envelope({}) == Envelope(status=Status.OK, items=[])
    assert to_envelope({"status": None, "items": None}) == Envelope(status=Status.OK, items=[])
    assert to_envelope(None) == Envelope(status=Status.ERROR, items=[])


def test_to_envelope_keeps_known_and_unknown_statuses() -> None:
    assert to_envelope({"status": "error", "items": [{"message": "no"}]}).status == Status.ERROR
    assert to_envelope({"status": "pending"}).status == "pending"


def test_to_envelope_wraps_single_record() -> None:
    assert to_envelope({"items": {"id": 1}}).items == [{"id": 1}]


def test_envelope_helpers() -> None:
    assert Envelope.init() == Envelope(status=Status.INIT, items=[])
    assert Envelope.error("down").items == [{"message": "down"}]
    assert Envelope().ok
