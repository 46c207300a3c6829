from __future__ import annotations

import importlib
import logging
import sys
import uuid
from collections.abc import Callable, Iterator
from pathlib import Path
from textwrap import dedent

import pytest

FOO_SOURCE = """
def factory(module, exports, require):
    def add(a, b):
        return a + b

    exports.add = add
"""

INDEX_SOURCE = """
def factory(module, exports, require):
    foo = require("foo")
    exports.result = foo.add(1, 2)
"""


@pytest.fixture()
def factory_package(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[[dict[str, str]], str]]:
    """Write an importable package of factory modules and return its name."""

    created: list[str] = []

    def _build(sources: dict[str, str]) -> str:
        package = f"latebind_fixture_{uuid.uuid4().hex[:8]}"
        package_dir = tmp_path / "site" / package
        package_dir.mkdir(parents=True)
        (package_dir / "__init__.py").write_text("", encoding="utf-8")
        for name, body in sources.items():
            (package_dir / f"{name}.py").write_text(dedent(body), encoding="utf-8")
        created.append(package)
        importlib.invalidate_caches()
        return package

    (tmp_path / "site").mkdir()
    monkeypatch.syspath_prepend(str(tmp_path / "site"))
    yield _build

    for package in created:
        for name in list(sys.modules):
            if name == package or name.startswith(f"{package}."):
                sys.modules.pop(name, None)


@pytest.fixture()
def foo_index_package(factory_package) -> str:
    return factory_package({"foo": FOO_SOURCE, "index": INDEX_SOURCE})


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Undo handlers installed by ``configure_logging`` during a test."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
