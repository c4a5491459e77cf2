"""Resolución de la raíz de módulo a partir de un import path completo.

Idea:
    example.com/a/b/cmd/d@latest
El módulo vive en `example.com/a/b`, así que pedir el path completo falla.
Se retrocede un segmento cada vez (`cmd/d` pasa al tail) hasta que el probe
encuentra un módulo o ya no queda nada que recortar.

Invariante: en cada iteración, `root + "/" + tail` reconstruye el path original.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.models import ModuleInfo, ResolvedLocation
from core.errors import ProbeError, ResolutionExhausted

logger = logging.getLogger(__name__)

ProbeFn = Callable[[str, str], ModuleInfo]


def resolve(
    path: str,
    version: str,
    probe: ProbeFn,
    *,
    on_attempt: Callable[[ResolvedLocation], None] | None = None,
) -> ResolvedLocation:
    """Encuentra la raíz de módulo más profunda que el probe acepta.

    - Hace como mucho `depth(path)` probes (un segmento menos por fallo).
    - Lanza `ResolutionExhausted` (envolviendo el último `ProbeError`) si ni
      el primer segmento resuelve.
    """

    segments = path.split("/")
    tail_segments: list[str] = []
    attempts = 0

    while True:
        root = "/".join(segments)
        tail = "/".join(tail_segments)
        if on_attempt is not None:
            on_attempt(ResolvedLocation(root=root, tail=tail))

        attempts += 1
        try:
            info = probe(root, version)
        except ProbeError as exc:
            if len(segments) == 1:
                raise ResolutionExhausted(path, version, attempts, exc) from exc
            logger.debug("no module at %s@%s (%s), trying parent", root, version, exc)
            tail_segments.insert(0, segments.pop())
            continue

        logger.debug("module root %s@%s, tail %r", root, version, tail)
        return ResolvedLocation(root=root, tail=tail, module=info)
