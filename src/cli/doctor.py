"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil
import subprocess

import httpx
import typer
from rich.console import Console

from adapters.http_client import build_http_client
from cli.ui_components import build_doctor_table
from core.config import AppSettings, write_user_env_vars
from core.errors import VaError
from core.resources_loader import load_default_registry

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_go(settings: AppSettings) -> tuple[bool, str]:
    found = shutil.which(settings.go_binary)
    if found is None:
        return False, f"{settings.go_binary!r} not found in PATH"
    try:
        proc = subprocess.run(
            [found, "version"],
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        return False, str(exc)
    if proc.returncode != 0:
        return False, proc.stderr.strip() or f"exit status {proc.returncode}"
    return True, proc.stdout.strip()


def _check_proxy(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_http_client(settings) as client:
            response = client.get(settings.goproxy_url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


def _check_aliases(settings: AppSettings) -> tuple[bool, str]:
    try:
        registry = load_default_registry(settings)
    except VaError as exc:
        return False, str(exc)
    return True, f"{len(registry)} aliases"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = build_doctor_table()

    ok_go, detail_go = _check_go(settings)
    table.add_row("Go toolchain", "OK" if ok_go else "FAIL", detail_go)

    table.add_row("Probe", "OK", settings.probe)

    # Connectivity (best-effort)
    ok_http, detail_http = _check_proxy(settings)
    status_http = "OK" if ok_http else ("FAIL" if settings.probe == "proxy" else "OPTIONAL")
    table.add_row("Module proxy", status_http, f"{settings.goproxy_url} {detail_http}")

    ok_lists, detail_lists = _check_aliases(settings)
    table.add_row("Alias lists", "OK" if ok_lists else "FAIL", detail_lists)

    _console.print(table)

    if not ok_go:
        _console.print(
            "\n[yellow]Note:[/yellow] install Go or set VA_GO_BINARY to the toolchain executable."
        )
    if not (ok_go and ok_lists):
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    go_binary = typer.prompt("Go binary", default=settings.go_binary, show_default=True).strip()
    probe = typer.prompt("Probe (go/proxy)", default=settings.probe, show_default=True).strip().lower()
    goproxy_url = typer.prompt("Module proxy URL", default=settings.goproxy_url, show_default=True).strip()

    if probe not in ("go", "proxy"):
        raise typer.BadParameter("probe must be 'go' or 'proxy'")
    if not go_binary or not goproxy_url:
        raise typer.BadParameter("go binary and proxy URL are required")

    env_path = write_user_env_vars(
        {
            "VA_GO_BINARY": go_binary,
            "VA_PROBE": probe,
            "VA_GOPROXY_URL": goproxy_url,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
