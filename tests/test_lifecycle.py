import pytest

from domains.core import (
    CORE_SERVICE_ENTRIES,
    ServiceRegistry,
    get_service_registry,
    register_core_services,
    reset_service_registry,
)


class Closable:
    def __init__(self, log, name):
        self.log = log
        self.name = name

    def close(self):
        self.log.append(self.name)


def test_dependencies_are_built_first_and_cached():
    built = []
    registry = ServiceRegistry()
    registry.register("gateway", lambda: built.append("gateway") or "g")
    registry.register("store", lambda: built.append("store") or "s", dependencies=["gateway"])

    assert registry.get("store") == "s"
    assert registry.get("store") == "s"
    assert built == ["gateway", "store"]
    assert registry.initialized_services == ["gateway", "store"]


def test_unknown_service_raises_key_error():
    with pytest.raises(KeyError):
        ServiceRegistry().get("missing")


def test_dependency_cycle_is_detected():
    registry = ServiceRegistry()
    registry.register("a", lambda: registry.get("b"), dependencies=["b"])
    registry.register("b", lambda: "b", dependencies=["a"])
    with pytest.raises(RuntimeError):
        registry.get("a")


@pytest.mark.asyncio
async def test_shutdown_releases_in_reverse_order():
    closed = []
    registry = ServiceRegistry()
    registry.register("first", lambda: Closable(closed, "first"))
    registry.register("second", lambda: Closable(closed, "second"), dependencies=["first"])
    registry.get("second")

    await registry.shutdown()

    assert closed == ["second", "first"]
    assert registry.initialized_services == []


def test_failing_teardown_does_not_stop_others():
    closed = []

    def broken(_instance):
        raise RuntimeError("boom")

    registry = ServiceRegistry()
    registry.register("ok", lambda: Closable(closed, "ok"))
    registry.register("bad", lambda: object(), cleanup=broken)
    registry.get("ok")
    registry.get("bad")

    registry.reset_all()
    assert closed == ["ok"]


def test_override_restores_previous_instance():
    registry = ServiceRegistry()
    registry.register("clock", lambda: "real")
    assert registry.get("clock") == "real"

    with registry.override("clock", "fake"):
        assert registry.get("clock") == "fake"
    assert registry.get("clock") == "real"

    with registry.override("extra", 1):
        assert "extra" in registry
    assert "extra" not in registry


def test_register_core_services_keeps_injected_doubles():
    reset_service_registry()
    try:
        registry = get_service_registry()
        double = object()
        registry.set("llm_client", double)

        register_core_services()

        assert set(registry.registered_services) == {entry.name for entry in CORE_SERVICE_ENTRIES}
        assert registry.get("llm_client") is double
    finally:
        reset_service_registry()
