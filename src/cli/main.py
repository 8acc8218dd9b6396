"""CLI principal (Typer).

Comandos:
- `buscar`: búsqueda completa (normaliza, geocodifica y clasifica).
- `normalizar`: solo la normalización de la dirección.
- `ubicar`: clasifica coordenadas sin geocodificar.
- `doctor`: diagnósticos del entorno.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_result_json
from cli import doctor
from cli.ui_components import build_result_panel, print_banner
from core.config import AppSettings
from core.domain.models import Point, SearchStatus
from core.errors import InvalidAddressError, ZoneDataError
from core.logging_config import get_logger
from core.normalizer import build_raw_address, normalize
from core.region_classifier import classify
from core.domain.catalog import StaticCatalog
from core.resources_loader import load_catalog
from core.services.search_pipeline import build_context, load_zones, search_address
from core.zone_locator import locate

app = typer.Typer(no_args_is_help=True, help="Geocode CABA addresses and resolve their zone.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _configure() -> None:
    settings = AppSettings()
    get_logger(settings.log_level, settings.log_file)


def _invalid_catalog(exc: ZoneDataError) -> typer.Exit:
    _console.print(f"[red]Invalid catalog:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _load_catalog(settings: AppSettings) -> StaticCatalog:
    try:
        return load_catalog(settings=settings)
    except ZoneDataError as exc:
        raise _invalid_catalog(exc) from exc


@app.command()
def buscar(
    calle: str = typer.Argument(..., help="Calle (o dirección completa)."),
    altura: str | None = typer.Option(None, "--altura", "-a", help="Altura (solo dígitos)."),
    json_path: Path | None = typer.Option(None, "--json", help="Exportar el resultado a JSON."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Sin banner."),
) -> None:
    """Busca una dirección y muestra zona operativa, subregión y región."""

    try:
        raw = build_raw_address(calle, altura)
    except InvalidAddressError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    try:
        context = build_context()
    except ZoneDataError as exc:
        raise _invalid_catalog(exc) from exc

    if not quiet:
        print_banner(_console)

    result = asyncio.run(search_address(raw, context))
    _console.print(build_result_panel(result))

    if json_path is not None:
        out = export_result_json(result=result, output_path=json_path)
        _console.print(f"[green]JSON:[/green] {out}")

    if result.status is SearchStatus.EMPTY_INPUT:
        raise typer.Exit(code=1)


@app.command()
def normalizar(direccion: str = typer.Argument(..., help="Dirección libre.")) -> None:
    """Muestra la forma normalizada que se envía al geocodificador."""

    catalog = _load_catalog(AppSettings())
    typer.echo(normalize(direccion, catalog.normalizer))


@app.command()
def ubicar(
    lon: float = typer.Argument(..., help="Longitud."),
    lat: float = typer.Argument(..., help="Latitud."),
) -> None:
    """Clasifica coordenadas (lon, lat) sin pasar por el geocodificador."""

    settings = AppSettings()
    catalog = _load_catalog(settings)
    zones = load_zones(settings)
    point = Point(lon=lon, lat=lat)
    zone = locate(point, zones.operational_zones, allow_nearest_fallback=True)
    subregion = locate(point, zones.subregions, allow_nearest_fallback=False)
    region = classify(subregion, catalog.regions)
    _console.print(f"Zona operativa: [green]{zone or '-'}[/green]")
    _console.print(f"Subregión: {subregion}")
    _console.print(f"Región: [cyan]{region}[/cyan]")


def run() -> None:
    app()
