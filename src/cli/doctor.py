"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.zone_loader import load_zones_geojson
from cli.ui_components import build_zones_table
from core.config import AppSettings, write_user_env_vars
from core.errors import ZoneDataError
from core.resources_loader import (
    DEFAULT_OPERATIONAL_ZONES_FILE,
    DEFAULT_SUBREGIONS_FILE,
    get_default_data_path,
)

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url, params={"q": settings.city_qualifier, "format": "json", "limit": "1"})
        return response.status_code == 200, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_zones(path: Path | None, name_property: str) -> tuple[str, str, tuple | None]:
    if path is None:
        return "MISSING", "No file configured or found in data/", None
    try:
        zones = load_zones_geojson(path, name_property)
    except ZoneDataError as exc:
        return "FAIL", str(exc), None
    return "OK", f"{len(zones)} zones from {path}", zones


@app.command()
def run(
    show_zones: bool = typer.Option(False, "--zones", help="List the loaded zones."),
    skip_network: bool = typer.Option(False, "--offline", help="Skip the geocoder connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="geozonas Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("City", "OK", settings.city_qualifier)
    table.add_row("Accent policy", "OK", settings.accent_policy.label())

    operational_path = settings.operational_zones_path or get_default_data_path(DEFAULT_OPERATIONAL_ZONES_FILE)
    subregions_path = settings.subregions_path or get_default_data_path(DEFAULT_SUBREGIONS_FILE)
    op_status, op_detail, op_zones = _check_zones(operational_path, settings.operational_name_property)
    sub_status, sub_detail, sub_zones = _check_zones(subregions_path, settings.subregion_name_property)
    table.add_row("Operational zones", op_status, op_detail)
    table.add_row("Subregions", sub_status, sub_detail)

    ok_http = True
    if not skip_network:
        ok_http, detail_http = asyncio.run(_check_http(settings.geocoder_url, settings))
        table.add_row("Geocoder", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if show_zones:
        _console.print(build_zones_table("Operational zones", op_zones))
        _console.print(build_zones_table("Subregions", sub_zones))

    if op_status != "OK" or sub_status != "OK":
        _console.print(
            "\n[yellow]Note:[/yellow] Searches still run without zone files, but report 'data not loaded'."
        )
    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="set-data")
def set_data(
    operational: Path = typer.Option(..., "--operacion", exists=True, dir_okay=False, help="Operational zones GeoJSON."),
    subregions: Path = typer.Option(..., "--subregiones", exists=True, dir_okay=False, help="Subregions GeoJSON."),
) -> None:
    """Store zone file paths in the user config .env (no manual editing)."""

    env_path = write_user_env_vars(
        {
            "GEOZONAS_OPERATIONAL_ZONES_PATH": str(operational.resolve()),
            "GEOZONAS_SUBREGIONS_PATH": str(subregions.resolve()),
        }
    )
    _console.print(f"[green]Saved data paths to:[/green] {env_path}")
