"""Probe contra un module proxy (protocolo GOPROXY).

Por qué existe:
- `go mod download` por cada ancestro es lento: lanza el toolchain y toca la caché.
- Un GET a `<proxy>/<path>/@v/<version>.info` basta para saber si hay módulo ahí.
  Solo la raíz encontrada se descarga después con el toolchain.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import build_http_client
from core.config import AppSettings
from core.domain.models import ModuleInfo
from core.errors import ProbeError

logger = logging.getLogger(__name__)


def escape_module_text(text: str) -> str:
    """Escapa mayúsculas como `!` + minúscula (case-insensitive filesystems)."""

    out = []
    for ch in text:
        if "A" <= ch <= "Z":
            out.append("!" + ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def info_url(base_url: str, path: str, version: str) -> str:
    base = base_url.rstrip("/")
    escaped = escape_module_text(path)
    if version == "latest":
        return f"{base}/{escaped}/@latest"
    return f"{base}/{escaped}/@v/{escape_module_text(version)}.info"


class ProxyProbe:
    """Implementa `ModuleProbe` consultando el proxy por HTTP."""

    def __init__(self, settings: AppSettings | None = None, client: httpx.Client | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_http_client(self._settings)

    def probe(self, path: str, version: str) -> ModuleInfo:
        url = info_url(self._settings.goproxy_url, path, version)
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise ProbeError(f"{path}@{version}: {exc}") from exc

        if not response.is_success:
            detail = response.text.strip().splitlines()[0] if response.text.strip() else ""
            raise ProbeError(f"{path}@{version}: HTTP {response.status_code} {detail}".rstrip())

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProbeError(f"{path}@{version}: invalid JSON from proxy") from exc
        if not isinstance(payload, dict):
            raise ProbeError(f"{path}@{version}: unexpected proxy response")
        return ModuleInfo(path=path, version=payload.get("Version") or version)

    def close(self) -> None:
        self._client.close()
