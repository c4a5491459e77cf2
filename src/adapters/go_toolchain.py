"""Adaptadores del toolchain de Go (subprocess).

- `GoModuleFetcher`: `go mod download -json path@version` (probe + descarga).
- `GoBuilder`: `go build -o <tmp>` en el directorio del paquete.
- `SubprocessRunner`: ejecuta el binario con stdio heredado.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.models import ModuleInfo
from core.errors import BuildFailure, DownloadFailure, ExecutionFailure, ProbeError

logger = logging.getLogger(__name__)


def go_env(settings: AppSettings) -> dict[str, str]:
    env = dict(os.environ)
    if settings.pass_goproxy:
        env["GOPROXY"] = settings.goproxy_url
    return env


def _download_error(output: str) -> str:
    """Extrae el campo `Error` del JSON de `go mod download`, si lo hay."""

    try:
        payload = json.loads(output)
    except ValueError:
        return output.strip()
    if isinstance(payload, dict) and payload.get("Error"):
        return str(payload["Error"])
    return output.strip()


class GoModuleFetcher:
    """`ModuleProbe` y `ModuleDownloader` sobre `go mod download -json`.

    Descargar es la forma de comprobar: si el comando falla, no hay módulo
    en ese path; si funciona, el módulo ya está en la caché y `Dir` lo indica.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def probe(self, path: str, version: str) -> ModuleInfo:
        cmd = [self._settings.go_binary, "mod", "download", "-json", f"{path}@{version}"]
        logger.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=go_env(self._settings),
                check=False,
            )
        except OSError as exc:
            raise ProbeError(f"{path}@{version}: cannot run {self._settings.go_binary}: {exc}") from exc

        if proc.returncode != 0:
            detail = _download_error(proc.stdout) or proc.stderr.strip()
            raise ProbeError(f"{path}@{version}: {detail}")

        try:
            return ModuleInfo.model_validate_json(proc.stdout)
        except ValidationError as exc:
            raise DownloadFailure(f"json: {exc}") from exc

    def download(self, path: str, version: str) -> ModuleInfo:
        try:
            return self.probe(path, version)
        except ProbeError as exc:
            raise DownloadFailure(str(exc)) from exc


class GoBuilder:
    """`ModuleBuilder`: compila a un fichero temporal que se borra al salir."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def _command(self, output: Path) -> list[str]:
        cmd = [self._settings.go_binary, "build"]
        if self._settings.build_verbose:
            cmd.append("-v")
        cmd.extend(["-o", str(output)])
        return cmd

    @contextmanager
    def build(self, package_dir: Path) -> Iterator[Path]:
        suffix = ".exe" if sys.platform.startswith("win") else ""
        fd, name = tempfile.mkstemp(prefix=package_dir.name or "tool", suffix=suffix)
        # Solo queremos el nombre: `go build` sobrescribe el fichero.
        os.close(fd)
        binary = Path(name)
        try:
            cmd = self._command(binary)
            logger.debug("running %s in %s", " ".join(cmd), package_dir)
            try:
                proc = subprocess.run(cmd, cwd=package_dir, env=go_env(self._settings), check=False)
            except OSError as exc:
                raise BuildFailure(f"cannot run {self._settings.go_binary}: {exc}") from exc
            if proc.returncode != 0:
                raise BuildFailure(f"go build in {package_dir} exited with status {proc.returncode}")
            yield binary
        finally:
            binary.unlink(missing_ok=True)


class SubprocessRunner:
    """`ProgramRunner` con stdin/stdout/stderr heredados."""

    def run(self, binary: Path, args: Sequence[str]) -> int:
        try:
            proc = subprocess.run([str(binary), *args], check=False)
        except OSError as exc:
            raise ExecutionFailure(str(exc)) from exc
        if proc.returncode < 0:
            # Muerto por señal: convención de shell.
            return 128 - proc.returncode
        return proc.returncode
