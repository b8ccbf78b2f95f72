"""Shared pytest fixtures for skema tests.

Provides ``host``: a throwaway host application package on ``sys.path``
that tests fill with controller modules.  Each test gets a fresh package
name, so imported modules never leak between tests.
"""

import importlib
import itertools
import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

from skema.config import SkemaConfig, define_config

_packages = itertools.count()


class HostApp:
    """A host application package under ``tmp_path``."""

    def __init__(self, root: Path, package: str) -> None:
        self.root = root
        self.package = package
        self.output = f"{package}_client"

    def module(self, dotted: str, source: str) -> str:
        """Write ``<package>.<dotted>`` and return its full module path."""
        parts = dotted.split(".")
        directory = self.root / self.package
        for part in parts[:-1]:
            directory = directory / part
            directory.mkdir(exist_ok=True)
            (directory / "__init__.py").touch()
        (directory / f"{parts[-1]}.py").write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        return f"{self.package}.{dotted}"

    def controller(self, name: str, source: str) -> str:
        """Write ``<package>.controllers.<name>`` and return its module path."""
        return self.module(f"controllers.{name}", source)

    def config(self, **kwargs) -> SkemaConfig:
        kwargs.setdefault("output", self.output)
        return define_config(root=self.root, **kwargs)


@pytest.fixture
def host(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[HostApp]:
    package = f"skema_host_{next(_packages)}"
    (tmp_path / package).mkdir()
    (tmp_path / package / "__init__.py").touch()
    monkeypatch.syspath_prepend(str(tmp_path))

    yield HostApp(tmp_path, package)

    for name in list(sys.modules):
        if name.split(".")[0] in (package, f"{package}_client"):
            del sys.modules[name]
