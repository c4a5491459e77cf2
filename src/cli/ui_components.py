"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- `va` y `va-doctor` comparten las mismas tablas.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.errors import VaError
from core.services.alias_registry import AliasRegistry


def build_alias_rows(registry: AliasRegistry) -> list[Text]:
    """Filas `short  =>  target  (description)` alineadas y ordenadas por short name."""

    aliases = registry.sorted()
    if not aliases:
        return []
    short_width = max(len(alias.short) for alias in aliases)
    target_width = max(len(str(alias.target)) for alias in aliases)

    rows: list[Text] = []
    for alias in aliases:
        row = Text.assemble(
            (alias.short.ljust(short_width), "cyan"),
            "  ",
            ("=>", "dim"),
            "  ",
            (str(alias.target).ljust(target_width), "white"),
        )
        if alias.description:
            row.append("  ")
            row.append(f"({alias.description})", style="dim")
        row.rstrip()
        rows.append(row)
    return rows


def print_alias_table(console: Console, registry: AliasRegistry) -> None:
    """Imprime el registro sin recortar: cada fila ocupa una línea completa."""

    for row in build_alias_rows(registry):
        console.print(row, soft_wrap=True, highlight=False)


def print_usage(console: Console, registry: AliasRegistry) -> None:
    """Volcado de uso cuando no se pasa ningún path."""

    console.print("ERROR: No supplied path.\n", style="bold red", markup=False, highlight=False)
    console.print("Registered short paths:\n", markup=False, highlight=False)
    print_alias_table(console, registry)
    console.print()


def print_error(console: Console, exc: VaError) -> None:
    console.print(Text.assemble((f"{exc.kind}: ", "bold red"), str(exc)), soft_wrap=True)


def build_doctor_table() -> Table:
    table = Table(title="va doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
