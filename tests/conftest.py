# Test configuration for pytest
#
# Note: `pythonpath = ["src"]` in pyproject.toml makes `core`, `adapters` and
# `cli` importable; `pip install -e .[test]` works as well.

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path

import pytest

from core.config import AppSettings
from core.domain.models import AliasSource, ModuleInfo
from core.errors import ProbeError
from core.services.alias_registry import load_registry
from core.services.launcher import Launcher


class FakeProbe:
    """Probe en memoria: solo existen los módulos de `modules` (path -> dir)."""

    def __init__(
        self,
        modules: dict[str, Path | None] | None = None,
        resolved_version: str | None = None,
    ) -> None:
        self.modules = modules or {}
        self.resolved_version = resolved_version
        self.calls: list[tuple[str, str]] = []

    def probe(self, path: str, version: str) -> ModuleInfo:
        self.calls.append((path, version))
        if path not in self.modules:
            raise ProbeError(f"{path}@{version}: not found")
        return ModuleInfo(path=path, version=self.resolved_version or version, dir=self.modules[path])


class FakeDownloader:
    def __init__(self, dirs: dict[str, Path | None] | None = None) -> None:
        self.dirs = dirs or {}
        self.calls: list[tuple[str, str]] = []

    def download(self, path: str, version: str) -> ModuleInfo:
        self.calls.append((path, version))
        return ModuleInfo(path=path, version=version, dir=self.dirs.get(path))


class FakeBuilder:
    """Registra qué se compiló y si el binario temporal se liberó."""

    def __init__(self, fail: Exception | None = None) -> None:
        self.fail = fail
        self.built: list[Path] = []
        self.released: list[Path] = []

    @contextmanager
    def build(self, package_dir: Path):
        self.built.append(package_dir)
        binary = Path("/tmp") / f"fake-{package_dir.name}"
        try:
            if self.fail is not None:
                raise self.fail
            yield binary
        finally:
            self.released.append(binary)


class FakeRunner:
    def __init__(self, code: int = 0, fail: Exception | None = None) -> None:
        self.code = code
        self.fail = fail
        self.calls: list[tuple[Path, list[str]]] = []

    def run(self, binary: Path, args) -> int:
        self.calls.append((binary, list(args)))
        if self.fail is not None:
            raise self.fail
        return self.code


@pytest.fixture(autouse=True)
def _clean_va_env(monkeypatch, tmp_path):
    """Aísla los tests de la config del desarrollador (VA_*, `.env` y listas de usuario)."""

    for key in list(os.environ):
        if key.upper().startswith("VA_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    # `env_file` se fija al importar `core.config`, antes de que exista este fixture.
    monkeypatch.setitem(AppSettings.model_config, "env_file", None)


@pytest.fixture
def gopl_registry():
    source = AliasSource(
        name="_",
        lines=["gopl example.com/gopl@latest go programming language tool"],
    )
    return load_registry([source])


@pytest.fixture
def make_launcher():
    def _make(registry, probe=None, downloader=None, builder=None, runner=None) -> Launcher:
        return Launcher(
            registry=registry,
            probe=probe or FakeProbe(),
            downloader=downloader or FakeDownloader(),
            builder=builder or FakeBuilder(),
            runner=runner or FakeRunner(),
        )

    return _make


@pytest.fixture
def fakes():
    """Acceso a las clases fake desde los tests."""

    class _Fakes:
        Probe = FakeProbe
        Downloader = FakeDownloader
        Builder = FakeBuilder
        Runner = FakeRunner

    return _Fakes
