"""Registro de alias (short name -> coordenada).

Formato de las listas (una entrada por línea, campos separados por espacios):

    # comentario
    gopls golang.org/x/tools/gopls@latest language server

- Comentarios (`#`) y líneas vacías se ignoran y el escaneo continúa.
- El nombre de la fuente define el namespace: `_` sin prefijo, `x` -> `x/<short>`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping

from core.domain.models import Alias, AliasSource, ModuleCoordinate
from core.errors import DuplicateAlias, InvalidAliasLine, InvalidCoordinate

logger = logging.getLogger(__name__)

_SHORT_RE = re.compile(r"[0-9A-Za-z](?:[0-9A-Za-z_-]*[0-9A-Za-z])?")


def validate_short(short: str) -> bool:
    """Alfanumérico al inicio y al final; `-`/`_` solo en el interior."""

    return _SHORT_RE.fullmatch(short) is not None


def parse_alias_line(line: str, *, source: str = "<memory>", lineno: int = 0) -> Alias | None:
    """Convierte una línea en `Alias` (sin namespace).

    Devuelve `None` para comentarios y líneas vacías.
    """

    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    fields = stripped.split(maxsplit=2)
    if len(fields) < 2:
        raise InvalidAliasLine(source, lineno, line, "bad line")
    short, target = fields[0], fields[1]
    description = fields[2].strip() if len(fields) > 2 else ""

    if not validate_short(short):
        raise InvalidAliasLine(source, lineno, line, f"bad short name {short!r}")
    try:
        coordinate = ModuleCoordinate.parse(target)
    except InvalidCoordinate as exc:
        raise InvalidAliasLine(source, lineno, line, f"bad module {target!r}") from exc

    return Alias(short=short, target=coordinate, description=description)


class AliasRegistry(Mapping[str, Alias]):
    """Mapping inmutable short name (con namespace) -> `Alias`."""

    def __init__(self, aliases: Mapping[str, Alias] | None = None) -> None:
        self._aliases: dict[str, Alias] = dict(aliases or {})

    def __getitem__(self, key: str) -> Alias:
        return self._aliases[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def sorted(self) -> list[Alias]:
        """Alias ordenados por short name (para el listado de uso)."""

        return [self._aliases[key] for key in sorted(self._aliases)]

    def expand(self, token: str) -> ModuleCoordinate:
        """Sustituye un alias en `name[@version]` y valida la coordenada final.

        Reglas:
        - Si `name` es un alias, su module path reemplaza a `name`.
        - La versión del alias solo se usa si el usuario no escribió `@`.
        - La coordenada resultante se valida siempre (el alias no la salta).
        """

        name, sep, version = token.partition("@")
        alias = self._aliases.get(name)
        if alias is not None:
            name = alias.target.path
            if not sep:
                sep, version = "@", alias.target.version
            logger.debug("alias %s expanded to %s%s%s", token, name, sep, version)
        return ModuleCoordinate.parse(f"{name}{sep}{version}")


def load_registry(sources: Iterable[AliasSource]) -> AliasRegistry:
    """Carga varias fuentes en un único registro.

    Lanza `InvalidAliasLine` ante la primera línea mal formada y `DuplicateAlias`
    si un short name con namespace se repite entre fuentes.
    """

    aliases: dict[str, Alias] = {}
    for source in sorted(sources, key=lambda s: s.name):
        namespace = source.namespace
        for lineno, line in enumerate(source.lines, start=1):
            alias = parse_alias_line(line, source=source.name, lineno=lineno)
            if alias is None:
                continue

            short = namespace + alias.short
            if short in aliases:
                raise DuplicateAlias(short, source.name)
            aliases[short] = alias.model_copy(update={"short": short})

    logger.debug("loaded %d aliases", len(aliases))
    return AliasRegistry(aliases)
