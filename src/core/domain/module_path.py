"""Gramática de module paths (estilo Go modules).

Reglas:
- Elementos separados por `/`, no vacíos, sin `//` ni `/` final.
- Caracteres permitidos: `A-Z a-z 0-9 - . _ ~`.
- El primer elemento es un dominio: contiene un punto y va en minúsculas.
- Un sufijo de versión mayor (`/vN`, `gopkg.in/...vN`) debe estar bien formado.
"""

from __future__ import annotations

import re

from core.errors import InvalidModulePath

_BAD_WINDOWS_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

_ELEM_CHARS = re.compile(r"[A-Za-z0-9._~-]+")
_FIRST_ELEM_CHARS = re.compile(r"[a-z0-9.-]+")
_GOPKG_IN = re.compile(r"(?P<prefix>.+)\.v(?P<major>[0-9]+)(?:-unstable)?")


def _check_elem(path: str, elem: str) -> None:
    if elem == "":
        raise InvalidModulePath(path, "empty path element")
    if elem.count(".") == len(elem):
        raise InvalidModulePath(path, f"invalid path element {elem!r}")
    if elem.startswith("."):
        raise InvalidModulePath(path, "leading dot in path element")
    if elem.endswith("."):
        raise InvalidModulePath(path, "trailing dot in path element")
    if not _ELEM_CHARS.fullmatch(elem):
        bad = next(ch for ch in elem if not _ELEM_CHARS.fullmatch(ch))
        raise InvalidModulePath(path, f"invalid char {bad!r}")

    short = elem.split(".", 1)[0]
    if short.upper() in _BAD_WINDOWS_NAMES:
        raise InvalidModulePath(path, f"{short!r} disallowed as path element component on Windows")

    # Nombres cortos 8.3 de Windows (`PROGRA~1`).
    tilde = short.rfind("~")
    if 0 <= tilde < len(short) - 1 and short[tilde + 1 :].isdigit():
        raise InvalidModulePath(path, "trailing tilde and digits in path element")


def _major_version_ok(path: str) -> bool:
    if path.startswith("gopkg.in/"):
        match = _GOPKG_IN.fullmatch(path)
        if match is None:
            return False
        major = match.group("major")
        return not (major.startswith("0") and major != "0")

    last = path.rsplit("/", 1)[-1]
    if "/" not in path or not re.fullmatch(r"v[0-9.]+", last):
        return True
    digits = last[1:]
    if "." in digits or digits.startswith("0") or digits == "1":
        return False
    return True


def check_module_path(path: str) -> None:
    """Valida un module path; lanza `InvalidModulePath` con el motivo."""

    if path == "":
        raise InvalidModulePath(path, "empty string")
    if path.startswith("-"):
        raise InvalidModulePath(path, "leading dash")
    if "//" in path:
        raise InvalidModulePath(path, "double slash")
    if path.endswith("/"):
        raise InvalidModulePath(path, "trailing slash")

    for elem in path.split("/"):
        _check_elem(path, elem)

    first = path.split("/", 1)[0]
    if "." not in first:
        raise InvalidModulePath(path, "missing dot in first path element")
    if not _FIRST_ELEM_CHARS.fullmatch(first):
        bad = next(ch for ch in first if not _FIRST_ELEM_CHARS.fullmatch(ch))
        raise InvalidModulePath(path, f"invalid char {bad!r} in first path element")

    if not _major_version_ok(path):
        raise InvalidModulePath(path, "invalid version")


def is_valid_module_path(path: str) -> bool:
    try:
        check_module_path(path)
    except InvalidModulePath:
        return False
    return True
