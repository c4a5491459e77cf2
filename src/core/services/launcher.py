"""Flujo completo: token -> coordenada -> raíz de módulo -> build -> ejecución.

Este módulo no sabe nada de `go` ni de HTTP: todos los efectos externos llegan
como colaboradores (`core.interfaces.toolchain`). La CLI construye las
implementaciones reales; los tests usan fakes en memoria.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from core.domain.models import ModuleCoordinate, ResolvedLocation
from core.errors import DownloadFailure
from core.interfaces.toolchain import ModuleBuilder, ModuleDownloader, ModuleProbe, ProgramRunner
from core.services.alias_registry import AliasRegistry
from core.services.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class Launcher:
    registry: AliasRegistry
    probe: ModuleProbe
    downloader: ModuleDownloader
    builder: ModuleBuilder
    runner: ProgramRunner

    def locate(self, coordinate: ModuleCoordinate) -> tuple[ResolvedLocation, Path]:
        """Resuelve la raíz del módulo y devuelve el directorio del paquete."""

        location = resolve(coordinate.path, coordinate.version, self.probe.probe)

        module = location.module
        if module is None or module.dir is None:
            # La descarga usa la versión que resolvió el probe.
            version = (module.version if module is not None else None) or coordinate.version
            module = self.downloader.download(location.root, version)
        if module.dir is None:
            raise DownloadFailure(f"no directory reported for {location.root}@{module.version or coordinate.version}")

        package_dir = Path(module.dir)
        if location.tail:
            package_dir = package_dir.joinpath(*location.tail.split("/"))
        return location, package_dir

    def launch(self, token: str, args: Sequence[str] = ()) -> int:
        """Lanza `token` con `args` y devuelve el exit code del programa."""

        coordinate = self.registry.expand(token)
        logger.debug("launching %s", coordinate)

        location, package_dir = self.locate(coordinate)
        logger.debug("module %s, package dir %s", location.root, package_dir)

        with self.builder.build(package_dir) as binary:
            return self.runner.run(binary, list(args))
