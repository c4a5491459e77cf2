"""CLI `va`: lanza un módulo Go a partir de un alias o `path@version`.

Uso:
    va [--alias-dir DIR]... [--list] [-v] TOKEN [ARGS...]

Todo lo que va después de TOKEN se pasa tal cual al programa (incluido `--help`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.go_toolchain import GoBuilder, GoModuleFetcher, SubprocessRunner
from adapters.module_proxy import ProxyProbe
from cli.ui_components import print_alias_table, print_error, print_usage
from core.config import AppSettings
from core.errors import VaError
from core.interfaces.toolchain import ModuleProbe
from core.logging_utils import configure_logging
from core.resources_loader import load_default_registry
from core.services.alias_registry import AliasRegistry
from core.services.launcher import Launcher

app = typer.Typer(add_completion=False, help="Download, build and run a Go module by alias or path@version.")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def build_launcher(settings: AppSettings, registry: AliasRegistry) -> Launcher:
    """Conecta el Core con los adaptadores reales según la configuración."""

    fetcher = GoModuleFetcher(settings)
    probe: ModuleProbe = ProxyProbe(settings) if settings.probe == "proxy" else fetcher
    return Launcher(
        registry=registry,
        probe=probe,
        downloader=fetcher,
        builder=GoBuilder(settings),
        runner=SubprocessRunner(),
    )


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
def launch(
    ctx: typer.Context,
    token: Optional[str] = typer.Argument(
        None,
        metavar="TOKEN",
        help="Alias or module path, optionally with @version.",
        show_default=False,
    ),
    alias_dir: Optional[List[Path]] = typer.Option(
        None,
        "--alias-dir",
        help="Extra directory of *.list alias files (repeatable).",
    ),
    show_list: bool = typer.Option(False, "--list", help="Print registered aliases and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Resolve TOKEN, build it and run it with the remaining arguments."""

    settings = AppSettings()
    configure_logging(logging.DEBUG if verbose else settings.log_level)

    try:
        registry = load_default_registry(settings, alias_dir or ())
    except VaError as exc:
        print_error(_err_console, exc)
        raise typer.Exit(code=1) from exc

    if show_list:
        print_alias_table(_console, registry)
        return

    if token is None:
        print_usage(_err_console, registry)
        raise typer.Exit(code=1)

    launcher = build_launcher(settings, registry)
    try:
        code = launcher.launch(token, ctx.args)
    except VaError as exc:
        logger.debug("launch failed", exc_info=True)
        print_error(_err_console, exc)
        raise typer.Exit(code=1) from exc
    finally:
        if isinstance(launcher.probe, ProxyProbe):
            launcher.probe.close()

    raise typer.Exit(code=code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
