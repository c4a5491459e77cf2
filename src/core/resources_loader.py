"""Cargador de listas de alias.

Este módulo vive en `core/` porque:
- centraliza *dónde* están las listas (las incluidas en el paquete + las del usuario)
- deja el registro (`core.services.alias_registry`) libre de I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from core.config import AppSettings, get_user_config_dir
from core.domain.models import AliasSource
from core.services.alias_registry import AliasRegistry, load_registry

logger = logging.getLogger(__name__)

LIST_SUFFIX = ".list"


def builtin_lists_dir() -> Path:
    # core/resources_loader.py -> core -> src -> adapters/alias_lists
    return Path(__file__).resolve().parents[1] / "adapters" / "alias_lists"


def user_lists_dir() -> Path:
    return get_user_config_dir() / "lists"


def list_dirs(settings: AppSettings | None = None, extra: Iterable[Path] = ()) -> list[Path]:
    """Directorios a escanear, en orden.

    Orden:
    1) listas incluidas en el paquete
    2) <user config>/lists (si existe)
    3) `settings.alias_dirs`
    4) `extra` (p.ej. `--alias-dir`)
    """

    settings = settings or AppSettings()
    dirs = [builtin_lists_dir()]
    user_dir = user_lists_dir()
    if user_dir.is_dir():
        dirs.append(user_dir)
    dirs.extend(settings.alias_dirs)
    dirs.extend(extra)
    return dirs


def load_sources(dirs: Iterable[Path]) -> list[AliasSource]:
    """Lee todos los `*.list` de cada directorio (no recursivo)."""

    sources: list[AliasSource] = []
    for directory in dirs:
        if not directory.is_dir():
            logger.warning("alias directory %s does not exist, skipping", directory)
            continue
        for path in sorted(directory.glob(f"*{LIST_SUFFIX}")):
            if not path.is_file():
                continue
            logger.debug("reading alias list %s", path)
            sources.append(AliasSource.from_path(path))
    return sources


def load_default_registry(settings: AppSettings | None = None, extra: Iterable[Path] = ()) -> AliasRegistry:
    return load_registry(load_sources(list_dirs(settings, extra)))
