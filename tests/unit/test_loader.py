from __future__ import annotations

from types import ModuleType

import pytest

from latebind import ModuleLoader, ModuleNotFoundError, ModuleRegistry


class CountingFactory:
    def __init__(self, value: int = 1) -> None:
        self.value = value
        self.calls = 0

    def __call__(self, module, exports, require) -> None:
        self.calls += 1
        exports.value = self.value


def test_factory_runs_exactly_once() -> None:
    loader = ModuleLoader()
    factory = CountingFactory()
    loader.register("alpha", factory)

    for _ in range(3):
        loader.resolve("alpha")

    assert factory.calls == 1


def test_resolve_returns_same_exports_object() -> None:
    loader = ModuleLoader()
    loader.register("alpha", CountingFactory(7))

    first = loader.resolve("alpha")
    first.extra = "mutated by caller"
    second = loader.resolve("alpha")

    assert first is second
    assert second.value == 7
    assert second.extra == "mutated by caller"


def test_factory_is_not_run_at_registration() -> None:
    loader = ModuleLoader()
    factory = CountingFactory()
    loader.register("alpha", factory)

    assert factory.calls == 0
    assert not loader.is_loaded("alpha")


def test_factory_receives_record_exports_and_resolver() -> None:
    loader = ModuleLoader()
    seen: dict[str, object] = {}

    def factory(module, exports, require) -> None:
        seen["module"] = module
        seen["exports"] = exports
        seen["require"] = require

    loader.register("alpha", factory)
    exports = loader.resolve("alpha")

    assert seen["module"] is loader.record("alpha")
    assert seen["exports"] is exports
    assert isinstance(exports, ModuleType)
    assert seen["require"] == loader.resolve


def test_unregistered_name_raises_and_leaves_state_untouched() -> None:
    registry = ModuleRegistry()
    loader = ModuleLoader(registry)
    factory = CountingFactory()
    loader.register("alpha", factory)

    with pytest.raises(ModuleNotFoundError) as excinfo:
        loader.resolve("missing")

    assert excinfo.value.name == "missing"
    assert "missing" not in registry
    assert not loader.is_loaded("missing")
    assert loader.module_names == []
    assert factory.calls == 0


def test_reregistering_before_first_resolve_swaps_factory() -> None:
    loader = ModuleLoader()
    original = CountingFactory(1)
    replacement = CountingFactory(2)
    loader.register("alpha", original)
    loader.register("alpha", replacement)

    assert loader.resolve("alpha").value == 2
    assert original.calls == 0
    assert replacement.calls == 1


def test_reregistering_after_resolve_keeps_cached_exports() -> None:
    loader = ModuleLoader()
    loader.register("alpha", CountingFactory(1))
    cached = loader.resolve("alpha")

    replacement = CountingFactory(2)
    loader.register("alpha", replacement)

    assert loader.resolve("alpha") is cached
    assert cached.value == 1
    assert replacement.calls == 0


def test_factory_may_replace_exports() -> None:
    loader = ModuleLoader()

    def factory(module, exports, require) -> None:
        module.exports = {"kind": "mapping"}

    loader.register("alpha", factory)

    assert loader.resolve("alpha") == {"kind": "mapping"}
    assert loader.resolve("alpha") is loader.record("alpha").exports


def test_accessor_style_exports() -> None:
    loader = ModuleLoader()
    state = {"count": 0}

    def factory(module, exports, require) -> None:
        def __getattr__(name: str):
            if name == "count":
                return state["count"]
            raise AttributeError(name)

        exports.__getattr__ = __getattr__

    loader.register("counter", factory)
    counter = loader.resolve("counter")

    assert counter.count == 0
    state["count"] = 5
    assert counter.count == 5


def test_dependencies_instantiate_in_request_order() -> None:
    loader = ModuleLoader()
    order: list[str] = []

    def leaf(module, exports, require) -> None:
        order.append("leaf")

    def root(module, exports, require) -> None:
        order.append("root:start")
        require("leaf")
        order.append("root:end")

    loader.register("root", root)
    loader.register("leaf", leaf)
    loader.resolve("root")

    assert order == ["root:start", "leaf", "root:end"]
    assert loader.module_names == ["root", "leaf"]
    assert loader.is_initialized("root")
    assert loader.is_initialized("leaf")


def test_require_is_an_alias_for_resolve() -> None:
    loader = ModuleLoader()
    loader.register("alpha", CountingFactory(3))

    assert loader.require("alpha") is loader.resolve("alpha")


def test_record_of_unloaded_module_raises() -> None:
    loader = ModuleLoader()

    with pytest.raises(ModuleNotFoundError):
        loader.record("alpha")


def test_loaders_do_not_share_state() -> None:
    first = ModuleLoader()
    second = ModuleLoader()
    first.register("alpha", CountingFactory())

    first.resolve("alpha")

    assert "alpha" not in second.registry
    assert not second.is_loaded("alpha")
