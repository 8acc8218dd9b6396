from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from core.domain.models import Point, Polygon, Zone
from core.geometry import polygon_centroid
from core.logging_config import LOGGER_NAME


def square(lon: float, lat: float, half: float) -> Polygon:
    return Polygon.from_coords(
        [
            (lon - half, lat - half),
            (lon + half, lat - half),
            (lon + half, lat + half),
            (lon - half, lat + half),
        ]
    )


def zone(name: str, polygon: Polygon, *, with_centroid: bool = True) -> Zone:
    return Zone(name=name, polygons=(polygon,), centroid=polygon_centroid(polygon) if with_centroid else None)


def feature(name_property: str, name: str | None, ring: list[tuple[float, float]], **extra: object) -> dict:
    properties: dict = dict(extra)
    if name is not None:
        properties[name_property] = name
    closed = [list(p) for p in ring] + [list(ring[0])]
    return {"type": "Feature", "properties": properties, "geometry": {"type": "Polygon", "coordinates": [closed]}}


def ring(lon: float, lat: float, half: float) -> list[tuple[float, float]]:
    return [
        (lon - half, lat - half),
        (lon + half, lat - half),
        (lon + half, lat + half),
        (lon - half, lat + half),
    ]


PALERMO_CENTER = Point(lon=-58.45, lat=-34.58)


@pytest.fixture
def palermo() -> Zone:
    return zone("Palermo", square(-58.45, -34.58, 0.01))


@pytest.fixture
def belgrano() -> Zone:
    return zone("Belgrano", square(-58.45, -34.55, 0.01))


@pytest.fixture
def zones_geojson(tmp_path: Path) -> tuple[Path, Path]:
    """Escribe un GeoJSON de zonas operativas y otro de subregiones."""

    operational = {
        "type": "FeatureCollection",
        "features": [
            feature("operacion", "Palermo", ring(-58.45, -34.58, 0.01)),
            feature("operacion", "Belgrano", ring(-58.45, -34.55, 0.01)),
        ],
    }
    subregions = {
        "type": "FeatureCollection",
        "features": [
            feature("nombre", "Palermo", ring(-58.45, -34.58, 0.02)),
            feature("nombre", "Devoto", ring(-58.51, -34.60, 0.02)),
        ],
    }
    op_path = tmp_path / "poligonos_zonas.geojson"
    sub_path = tmp_path / "subregiones.geojson"
    op_path.write_text(json.dumps(operational), encoding="utf-8")
    sub_path.write_text(json.dumps(subregions), encoding="utf-8")
    return op_path, sub_path


@pytest.fixture(autouse=True)
def _reset_project_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
