"""Geometría sobre (lon, lat).

No es un motor espacial: la pertenencia se resuelve con ray casting propio
(regla par-impar); centroides y distancias métricas se delegan en shapely y
pyproj.
"""

from __future__ import annotations

import math
from typing import Sequence

from pyproj import CRS, Transformer
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import transform as shp_transform

from core.domain.models import Point, Polygon

WGS84 = "EPSG:4326"


def _ring_contains(point: Point, ring: Sequence[Point]) -> bool:
    n = len(ring)
    if n < 3:
        return False

    x, y = point.lon, point.lat
    inside = False
    for i in range(n):
        xi, yi = ring[i].lon, ring[i].lat
        xj, yj = ring[i - 1].lon, ring[i - 1].lat
        if (yi > y) != (yj > y):
            intersect_x = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < intersect_x:
                inside = not inside
    return inside


def contains(point: Point, polygon: Polygon | Sequence[Point]) -> bool:
    """Ray casting (regla par-impar). Menos de 3 vértices -> False.

    Con un `Polygon`, un punto dentro de cualquiera de sus huecos queda fuera.
    El resultado para puntos exactamente sobre un borde no está definido.
    """

    if not isinstance(polygon, Polygon):
        return _ring_contains(point, polygon)
    if not _ring_contains(point, polygon.vertices):
        return False
    return not any(_ring_contains(point, hole) for hole in polygon.holes)


def contains_any(point: Point, polygons: Sequence[Polygon]) -> bool:
    """True si el punto cae en alguna de las partes."""

    return any(contains(point, polygon) for polygon in polygons)


def to_shapely(polygons: Polygon | Sequence[Polygon]) -> ShapelyPolygon | ShapelyMultiPolygon:
    parts = [polygons] if isinstance(polygons, Polygon) else list(polygons)
    if not parts:
        raise ValueError("At least one polygon is required.")
    shapes = [
        ShapelyPolygon(
            [(v.lon, v.lat) for v in part.vertices],
            [[(v.lon, v.lat) for v in hole] for hole in part.holes],
        )
        for part in parts
    ]
    return shapes[0] if len(shapes) == 1 else ShapelyMultiPolygon(shapes)


def polygon_centroid(polygons: Polygon | Sequence[Polygon]) -> Point:
    """Centroide de área (de todas las partes, descontando huecos)."""

    centroid = to_shapely(polygons).centroid
    return Point(lon=centroid.x, lat=centroid.y)


def planar_distance(a: Point, b: Point) -> float:
    """Distancia euclídea en grados crudos (sin corrección geodésica)."""

    return math.hypot(a.lon - b.lon, a.lat - b.lat)


def _local_metric_transformer(origin: Point) -> Transformer:
    # Equidistante azimutal centrada en el punto: distancias en metros exactas desde el origen.
    local = CRS.from_proj4(
        f"+proj=aeqd +lat_0={origin.lat} +lon_0={origin.lon} +datum=WGS84 +units=m +no_defs"
    )
    return Transformer.from_crs(WGS84, local, always_xy=True)


def distance_to_boundary_m(point: Point, polygons: Polygon | Sequence[Polygon]) -> float:
    """Distancia mínima (metros) del punto al límite de la zona (incluye huecos)."""

    to_local = _local_metric_transformer(point)
    projected = shp_transform(to_local.transform, to_shapely(polygons))
    return projected.boundary.distance(ShapelyPoint(0.0, 0.0))
