"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (toolchain/proxy) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "VA_"
USER_ENV_HEADER = "# va settings written by `va-doctor configure`"


def get_user_config_dir() -> Path:
    """Directorio `va` dentro de la config del sistema (`%APPDATA%`, `Application Support`, XDG)."""

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / "va"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "va"
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "va"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _quote(value: str) -> str:
    if value and not any(ch.isspace() or ch in "#\"'" for ch in value):
        return value
    return '"' + value.replace('"', '\\"') + '"'


def read_va_env(path: Path) -> dict[str, str]:
    """Variables `VA_*` de un `.env`. Comentarios y claves ajenas se descartan."""

    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip().upper()
        if sep and key.startswith(ENV_PREFIX):
            values[key] = _unquote(value.strip())
    return values


def write_user_env_vars(values: Mapping[str, str | None]) -> Path:
    """Fusiona `values` en el `.env` de usuario que lee `AppSettings`.

    Un valor `None` borra la variable. El fichero se reescribe ordenado por clave.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    merged = read_va_env(env_path)
    for key, value in values.items():
        key = key.upper()
        if not key.startswith(ENV_PREFIX):
            raise ValueError(f"{key} is not a {ENV_PREFIX}* setting")
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value

    lines = [USER_ENV_HEADER]
    lines.extend(f"{key}={_quote(merged[key])}" for key in sorted(merged))
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    go_binary: str = Field(
        default="go",
        min_length=1,
        description="Ejecutable del toolchain de Go.",
    )
    probe: Literal["go", "proxy"] = Field(
        default="go",
        description="Cómo se comprueba si existe un módulo: `go mod download` o GOPROXY por HTTP.",
    )
    goproxy_url: str = Field(
        default="https://proxy.golang.org",
        min_length=8,
        description="Base URL del module proxy.",
    )
    pass_goproxy: bool = Field(
        default=False,
        description="Exportar `goproxy_url` como GOPROXY a los comandos `go`.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request al proxy (segundos).",
    )
    user_agent: str = Field(
        default="va/0.1",
        min_length=1,
        description="User-Agent para peticiones al proxy.",
    )

    alias_dirs: list[Path] = Field(
        default_factory=list,
        description="Directorios extra con listas `*.list` (JSON en env: VA_ALIAS_DIRS='[\"...\"]').",
    )
    build_verbose: bool = Field(
        default=False,
        description="Pasar `-v` a `go build`.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
