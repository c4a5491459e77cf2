"""Errores del Core.

Por qué una jerarquía propia:
- La CLI captura `VaError` en un único punto y muestra un diagnóstico corto.
- Cada tipo nombra el paso que falló (alias, resolución, build, ejecución).

Nota:
- El exit code no-cero del programa invocado NO es un error: se propaga tal cual.
"""

from __future__ import annotations


class VaError(Exception):
    """Base de todos los errores de va."""

    kind = "error"


class InvalidCoordinate(VaError, ValueError):
    """`path@version` mal formado o sin versión."""

    kind = "invalid pkg"

    def __init__(self, coordinate: str, reason: str = "must be path@version") -> None:
        super().__init__(f"{coordinate} ({reason})")
        self.coordinate = coordinate
        self.reason = reason


class InvalidModulePath(InvalidCoordinate):
    """El path no cumple la gramática de module paths."""

    kind = "invalid module path"


class InvalidAliasLine(VaError, ValueError):
    """Línea de lista de alias mal formada."""

    kind = "bad alias line"

    def __init__(self, source: str, lineno: int, line: str, reason: str) -> None:
        super().__init__(f"{source}:{lineno}: {reason}: {line!r}")
        self.source = source
        self.lineno = lineno
        self.line = line
        self.reason = reason


class UnreadableAliasList(VaError):
    """Un fichero `.list` que no se puede leer o no es UTF-8."""

    kind = "bad alias list"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class DuplicateAlias(VaError):
    """El mismo short name (con namespace) aparece dos veces."""

    kind = "duplicate alias"

    def __init__(self, short: str, source: str) -> None:
        super().__init__(f"link {short} already exists, file: {source}")
        self.short = short
        self.source = source


class ProbeError(VaError):
    """Un probe concreto no encontró módulo en `path@version`."""

    kind = "probe"


class ResolutionExhausted(VaError):
    """Ningún ancestro del path resolvió a un módulo real."""

    kind = "download"

    def __init__(self, path: str, version: str, attempts: int, last_error: ProbeError) -> None:
        super().__init__(f"no module found for {path}@{version} after {attempts} attempts: {last_error}")
        self.path = path
        self.version = version
        self.attempts = attempts
        self.last_error = last_error


class DownloadFailure(VaError):
    """El módulo existe pero no se pudo descargar/desempaquetar."""

    kind = "download"


class BuildFailure(VaError):
    kind = "build"


class ExecutionFailure(VaError):
    """El binario construido no pudo arrancar."""

    kind = "va"
