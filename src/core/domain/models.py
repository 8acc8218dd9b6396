"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- `frozen=True` vuelve inmutables a puntos, polígonos y zonas: se construyen
  una vez por búsqueda (o al arrancar) y nadie los modifica después.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


OUTSIDE_AREA = "outside area"
DATA_NOT_LOADED = "data not loaded"
UNDEFINED_REGION = "undefined region"
UNCLASSIFIED_ZONE = "Zona no identificada"
NEAREST_QUALIFIER = " (nearest zone)"


class Point(BaseModel):
    """Par (longitud, latitud). GeoJSON usa el mismo orden (x=lon, y=lat)."""

    model_config = ConfigDict(frozen=True)

    lon: float = Field(..., allow_inf_nan=False, description="Longitud (x).")
    lat: float = Field(..., allow_inf_nan=False, description="Latitud (y).")

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> "Point":
        lon, lat = pair[0], pair[1]
        return cls(lon=lon, lat=lat)


def _open_ring(value: tuple[Point, ...]) -> tuple[Point, ...]:
    if len(value) > 1 and value[0] == value[-1]:
        value = value[:-1]
    if len(value) < 3:
        raise ValueError("A polygon ring requires at least three vertices.")
    return value


class Polygon(BaseModel):
    """Anillo exterior + huecos opcionales, todos implícitamente cerrados.

    Si un anillo llega cerrado (primer vértice == último, como en GeoJSON) se
    descarta el vértice repetido.
    """

    model_config = ConfigDict(frozen=True)

    vertices: tuple[Point, ...] = Field(
        ...,
        description="Anillo exterior en orden; mínimo tres vértices distintos.",
    )
    holes: tuple[tuple[Point, ...], ...] = Field(
        default=(),
        description="Anillos interiores (huecos); un punto dentro de un hueco queda fuera.",
    )

    @field_validator("vertices")
    @classmethod
    def open_ring(cls, value: tuple[Point, ...]) -> tuple[Point, ...]:
        return _open_ring(value)

    @field_validator("holes")
    @classmethod
    def open_holes(cls, value: tuple[tuple[Point, ...], ...]) -> tuple[tuple[Point, ...], ...]:
        return tuple(_open_ring(hole) for hole in value)

    @classmethod
    def from_coords(
        cls,
        coords: Sequence[Sequence[float]],
        holes: Sequence[Sequence[Sequence[float]]] = (),
    ) -> "Polygon":
        return cls(
            vertices=tuple(Point.from_pair(c) for c in coords),
            holes=tuple(tuple(Point.from_pair(c) for c in hole) for hole in holes),
        )

    def __len__(self) -> int:
        return len(self.vertices)


class Zone(BaseModel):
    """Zona con nombre: operativa (fina) o subregión (gruesa).

    Una zona puede tener varias partes (MultiPolygon en GeoJSON); el punto
    pertenece a la zona si cae en cualquiera de ellas.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Nombre único dentro de su colección.")
    polygons: tuple[Polygon, ...] = Field(..., min_length=1, description="Partes de la zona.")
    centroid: Point | None = Field(
        default=None,
        description="Centroide usado por el fallback de zona más cercana.",
    )


def _ensure_unique_names(zones: tuple[Zone, ...] | None) -> tuple[Zone, ...] | None:
    if zones is None:
        return None
    seen: set[str] = set()
    for zone in zones:
        if zone.name in seen:
            raise ValueError(f"Duplicate zone name: {zone.name!r}")
        seen.add(zone.name)
    return zones


class ZoneCatalog(BaseModel):
    """Las dos colecciones de zonas, de solo lectura tras la carga.

    `None` significa "no cargado"; una tupla vacía es una colección cargada
    que no contiene zonas.
    """

    model_config = ConfigDict(frozen=True)

    operational_zones: tuple[Zone, ...] | None = None
    subregions: tuple[Zone, ...] | None = None

    @field_validator("operational_zones", "subregions")
    @classmethod
    def unique_names(cls, value: tuple[Zone, ...] | None) -> tuple[Zone, ...] | None:
        return _ensure_unique_names(value)


class GeocodeCandidate(BaseModel):
    """Candidato devuelto por el geocodificador (Nominatim entrega strings numéricos)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    display_name: str = Field(
        default="",
        description="Dirección en forma legible según el servicio.",
    )
    lon: float = Field(..., allow_inf_nan=False)
    lat: float = Field(..., allow_inf_nan=False)

    @property
    def point(self) -> Point:
        return Point(lon=self.lon, lat=self.lat)


class SearchStatus(str, Enum):
    """Estado terminal de una búsqueda."""

    OK = "ok"
    EMPTY_INPUT = "empty_input"
    NOT_FOUND = "not_found"
    CONNECTIVITY_ERROR = "connectivity_error"

    def message(self) -> str:
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    SearchStatus.OK: "Zone resolved.",
    SearchStatus.EMPTY_INPUT: "Please enter an address.",
    SearchStatus.NOT_FOUND: "No coordinates found for the address.",
    SearchStatus.CONNECTIVITY_ERROR: "Could not reach the geocoding service. Please try again.",
}


class SearchResult(BaseModel):
    """Resultado de una búsqueda, listo para mostrar o exportar.

    Solo `status == OK` trae zona/subregión/región; el resto de estados
    nunca lleva resultados parciales.
    """

    model_config = ConfigDict(frozen=True)

    status: SearchStatus
    address: str | None = Field(
        default=None,
        description="Dirección normalizada enviada al geocodificador.",
    )
    display_address: str | None = Field(
        default=None,
        description="Dirección según el primer candidato del geocodificador.",
    )
    point: Point | None = None
    operational_zone: str | None = Field(
        default=None,
        description="Zona operativa; puede llevar el sufijo ' (nearest zone)'.",
    )
    subregion: str | None = None
    region: str | None = None
    border_distance_m: float | None = Field(
        default=None,
        ge=0.0,
        description="Distancia al borde de la zona operativa, si es menor al umbral.",
    )

    @property
    def message(self) -> str:
        return self.status.message()
