"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import SearchResult, SearchStatus, Zone


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite en modo JSON)."""

    title = Text("GEOZONAS", style="bold cyan")
    subtitle = Text("Dirección • Zona operativa • Subregión • Región", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_panel(result: SearchResult) -> Panel:
    """Panel para presentar un `SearchResult`."""

    if result.status is not SearchStatus.OK:
        style = "yellow" if result.status is SearchStatus.NOT_FOUND else "red"
        body = Text(result.message, style=style)
        if result.address:
            body.append(f"\n\nDirección normalizada: {result.address}", style="dim")
        return Panel(body, title=Text("Sin resultado", style=f"bold {style}"), border_style=style)

    body = Text()
    body.append("Dirección: ", style="bold")
    body.append(f"{result.address}\n")
    if result.display_address:
        body.append(f"{result.display_address}\n", style="dim")
    if result.point is not None:
        body.append(f"Coordenadas: {result.point.lat:.6f}, {result.point.lon:.6f}\n", style="dim")
    body.append("\nZona operativa: ", style="bold")
    body.append(f"{result.operational_zone or '-'}\n", style="green")
    body.append("Subregión: ", style="bold")
    body.append(f"{result.subregion}\n")
    body.append("Región: ", style="bold")
    body.append(f"{result.region}", style="cyan")
    if result.border_distance_m is not None:
        body.append(
            f"\n\nEl punto está a {round(result.border_distance_m)} metros del límite de la zona.",
            style="yellow",
        )

    return Panel(body, title=Text("Resultado", style="bold green"), border_style="green")


def build_zones_table(title: str, zones: tuple[Zone, ...] | None) -> Table:
    """Tabla resumida de una colección de zonas."""

    table = Table(title=title)
    table.add_column("Zona", style="cyan", no_wrap=True)
    table.add_column("Partes", style="white", justify="right")
    table.add_column("Vértices", style="white", justify="right")
    table.add_column("Centroide", style="dim")
    for zone in zones or ():
        centroid = f"{zone.centroid.lon:.5f}, {zone.centroid.lat:.5f}" if zone.centroid else "-"
        vertices = sum(len(polygon) for polygon in zone.polygons)
        table.add_row(zone.name, str(len(zone.polygons)), str(vertices), centroid)
    return table
