"""Unit tests for the timestamp ledger and the context registry."""

from __future__ import annotations

from cssforge.cache.context import BuildContext
from cssforge.cache.ledger import TimestampLedger
from cssforge.cache.registry import ContextRegistry, get_or_insert


def test_ledger_records_new_and_changed_entries():
    ledger = TimestampLedger()
    assert ledger.record("/a.css", 10) is True
    assert ledger.record("/a.css", 10) is False
    assert ledger.record("/a.css", 20) is True
    assert ledger.get("/a.css") == 20
    assert ledger.get("/b.css") is None
    assert "/a.css" in ledger
    assert len(ledger) == 1


def test_ledger_as_dict_is_a_copy():
    ledger = TimestampLedger()
    ledger.record("/a.css", 1)
    snapshot = ledger.as_dict()
    snapshot["/b.css"] = 2
    assert list(ledger) == ["/a.css"]


def test_get_or_insert_calls_factory_once():
    calls = []

    def factory(key):
        calls.append(key)
        return key.upper()

    mapping: dict[str, str] = {}
    assert get_or_insert(mapping, "x", factory) == "X"
    assert get_or_insert(mapping, "x", factory) == "X"
    assert calls == ["x"]


def test_registry_creates_empty_context_on_first_sight():
    registry = ContextRegistry()
    ctx = registry.get("/app/main.css")
    assert isinstance(ctx, BuildContext)
    assert ctx.identity == "/app/main.css"
    assert ctx.compiler is None
    assert ctx.raw_css == ""
    assert ctx.optimized_css == ""
    assert len(ctx.ledger) == 0


def test_registry_returns_same_mutable_context():
    registry = ContextRegistry()
    ctx = registry.get("/app/main.css")
    ctx.raw_css = ".flex{display:flex}"
    assert registry.get("/app/main.css") is ctx
    assert registry.get("/app/main.css").raw_css == ".flex{display:flex}"


def test_registry_keeps_identities_disjoint():
    registry = ContextRegistry()
    a = registry.get("/app/a.css")
    b = registry.get("/app/b.css")
    piped = registry.get("")
    assert a is not b and b is not piped
    assert registry.identities() == ["/app/a.css", "/app/b.css", ""]
    assert "" in registry
    assert len(registry) == 3
