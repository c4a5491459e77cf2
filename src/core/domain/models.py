"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (coordenadas, alias) sin acoplar el Core a I/O.
- Modelos inmutables (`frozen`): un alias cargado no cambia durante el proceso.

Nota:
- Estos modelos describen *qué* se lanza, no *cómo* se descarga o compila.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.module_path import check_module_path
from core.errors import InvalidCoordinate, UnreadableAliasList

NO_PREFIX_SOURCE = "_"


class ModuleCoordinate(BaseModel):
    """Par `path@version` que identifica un módulo en una revisión concreta."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(
        ...,
        description="Module path jerárquico (p.ej. 'golang.org/x/tools/gopls').",
    )
    version: str = Field(
        ...,
        min_length=1,
        description="Versión/query del módulo (p.ej. 'latest', 'v1.2.0').",
    )

    @field_validator("path")
    @classmethod
    def _valid_path(cls, value: str) -> str:
        check_module_path(value)
        return value

    @classmethod
    def parse(cls, raw: str) -> "ModuleCoordinate":
        """Parsea `path@version`; lanza `InvalidCoordinate` si no es válido.

        Reglas:
        - Exactamente un `@` (en modo módulo la versión es obligatoria).
        - Versión no vacía y path con gramática válida.
        """

        parts = raw.split("@")
        if len(parts) != 2 or not parts[1]:
            raise InvalidCoordinate(raw)
        path, version = parts
        check_module_path(path)
        return cls(path=path, version=version)

    def __str__(self) -> str:
        return f"{self.path}@{self.version}"


class Alias(BaseModel):
    """Short name -> coordenada completa (con descripción opcional)."""

    model_config = ConfigDict(frozen=True)

    short: str = Field(
        ...,
        min_length=1,
        description="Short name ya prefijado con su namespace (p.ej. 'x/gopls').",
    )
    target: ModuleCoordinate = Field(
        ...,
        description="Coordenada a la que se expande el alias.",
    )
    description: str = Field(
        default="",
        description="Texto libre mostrado en el listado de alias.",
    )


class AliasSource(BaseModel):
    """Lista de alias con nombre (típicamente un fichero `<name>.list`)."""

    name: str = Field(..., min_length=1)
    lines: list[str] = Field(default_factory=list)

    @property
    def namespace(self) -> str:
        """Prefijo de los short names: `_` significa sin prefijo."""

        if self.name == NO_PREFIX_SOURCE:
            return ""
        return self.name + "/"

    @classmethod
    def from_path(cls, path: Path) -> "AliasSource":
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise UnreadableAliasList(str(path), f"not valid UTF-8 at byte {exc.start}") from exc
        except OSError as exc:
            raise UnreadableAliasList(str(path), exc.strerror or str(exc)) from exc
        return cls(name=path.stem, lines=text.splitlines())


class ModuleInfo(BaseModel):
    """Subset de la salida de `go mod download -json`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    path: str = Field(..., alias="Path")
    version: str | None = Field(default=None, alias="Version")
    dir: Path | None = Field(
        default=None,
        alias="Dir",
        description="Directorio del módulo desempaquetado en la caché.",
    )
    error: str | None = Field(default=None, alias="Error")


class ResolvedLocation(BaseModel):
    """Raíz de módulo descubierta + subpath restante (tail)."""

    model_config = ConfigDict(frozen=True)

    root: str
    tail: str = ""
    module: ModuleInfo | None = None

    @property
    def joined(self) -> str:
        """Reconstruye el path original uniendo `root` y `tail`."""

        if not self.tail:
            return self.root
        return f"{self.root}/{self.tail}"
