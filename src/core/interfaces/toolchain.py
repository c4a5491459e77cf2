"""Contratos de los colaboradores externos (toolchain, proxy, procesos).

Por qué Protocol:
- El Core (resolver, launcher) depende de estas abstracciones, no de `go` ni de HTTP.
- Permite testear todo el flujo en memoria con fakes.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import ModuleInfo


@runtime_checkable
class ModuleProbe(Protocol):
    """Comprueba si existe un módulo exactamente en `path@version`.

    Reglas de diseño:
    - Devuelve `ModuleInfo` si existe (con `dir` si además lo descargó).
    - Lanza `core.errors.ProbeError` si no hay módulo en ese path.
    """

    def probe(self, path: str, version: str) -> ModuleInfo:
        ...


@runtime_checkable
class ModuleDownloader(Protocol):
    def download(self, path: str, version: str) -> ModuleInfo:
        """Descarga el módulo a la caché y devuelve su `ModuleInfo` con `dir`."""

        ...


@runtime_checkable
class ModuleBuilder(Protocol):
    """Compila un paquete a un binario temporal.

    El context manager borra el binario al salir, haya ido bien o mal.
    """

    def build(self, package_dir: Path) -> AbstractContextManager[Path]:
        ...


@runtime_checkable
class ProgramRunner(Protocol):
    def run(self, binary: Path, args: Sequence[str]) -> int:
        """Ejecuta el binario con stdio heredado y devuelve su exit code."""

        ...
