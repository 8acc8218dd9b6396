"""Carga de zonas desde GeoJSON.

Soporta un FeatureCollection cuyos features tienen:
- geometry: Polygon o MultiPolygon (se conservan todas las partes y sus huecos)
- properties[<name_property>]: nombre de la zona
- properties["centroid"] (opcional): [lon, lat]; si falta se calcula

Features sin nombre, sin geometría poligonal o con geometría degenerada se
descartan con un warning; el resto de la colección se carga igual.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from shapely.errors import GEOSException
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from core.domain.models import Point, Polygon, Zone, ZoneCatalog
from core.errors import ZoneDataError

logger = logging.getLogger("geozonas.zone_loader")

POLYGONAL_TYPES = ("Polygon", "MultiPolygon")

_GEOMETRY_ERRORS = (ValueError, TypeError, IndexError, KeyError, AttributeError, GEOSException)


def _parts(geom: BaseGeometry) -> tuple[Polygon, ...]:
    shapes = geom.geoms if geom.geom_type == "MultiPolygon" else (geom,)
    return tuple(
        Polygon.from_coords(
            part.exterior.coords,
            [interior.coords for interior in part.interiors],
        )
        for part in shapes
        if not part.is_empty
    )


def zone_from_feature(feature: dict[str, Any], name_property: str) -> Zone | None:
    properties = feature.get("properties") or {}
    name = properties.get(name_property)
    if not isinstance(name, str) or not name.strip():
        logger.warning("Skipping feature without %r property", name_property)
        return None
    name = name.strip()

    geometry = feature.get("geometry") or {}
    if geometry.get("type") not in POLYGONAL_TYPES:
        logger.warning("Skipping zone %r: geometry %r is not polygonal", name, geometry.get("type"))
        return None

    try:
        geom = shape(geometry)
        if geom.is_empty or geom.area == 0:
            raise ValueError("empty or zero-area geometry")
        polygons = _parts(geom)
        raw_centroid = properties.get("centroid")
        if raw_centroid:
            centroid = Point.from_pair(raw_centroid)
        else:
            center = geom.centroid
            centroid = Point(lon=center.x, lat=center.y)
        return Zone(name=name, polygons=polygons, centroid=centroid)
    except _GEOMETRY_ERRORS as exc:
        logger.warning("Skipping zone %r: invalid geometry (%s)", name, exc)
        return None


def parse_zones_geojson(data: Any, name_property: str) -> tuple[Zone, ...]:
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise ZoneDataError("Zone data must be a GeoJSON FeatureCollection.")
    features = data.get("features")
    if not isinstance(features, list):
        raise ZoneDataError("FeatureCollection without a 'features' list.")

    zones: list[Zone] = []
    seen: set[str] = set()
    for feature in features:
        zone = zone_from_feature(feature, name_property)
        if zone is None:
            continue
        if zone.name in seen:
            raise ZoneDataError(f"Duplicate zone name: {zone.name!r}")
        seen.add(zone.name)
        zones.append(zone)
    return tuple(zones)


def load_zones_geojson(path: Path, name_property: str) -> tuple[Zone, ...]:
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, json.JSONDecodeError) as exc:
        raise ZoneDataError(f"Cannot read zone file {path}: {exc}") from exc

    zones = parse_zones_geojson(data, name_property)
    logger.info("Loaded %d zones from %s", len(zones), path)
    return zones


def load_zone_catalog(
    operational_path: Path | None,
    subregions_path: Path | None,
    *,
    operational_name_property: str = "operacion",
    subregion_name_property: str = "nombre",
) -> ZoneCatalog:
    """Carga ambas colecciones. Una colección que no se puede leer queda en `None`.

    Así el resto del pipeline sigue funcionando y el localizador reporta
    "data not loaded" solo para esa colección.
    """

    def _try_load(path: Path | None, name_property: str) -> tuple[Zone, ...] | None:
        if path is None:
            return None
        try:
            return load_zones_geojson(path, name_property)
        except ZoneDataError:
            logger.exception("Zone data unavailable: %s", path)
            return None

    return ZoneCatalog(
        operational_zones=_try_load(operational_path, operational_name_property),
        subregions=_try_load(subregions_path, subregion_name_property),
    )
