"""Localización de un punto dentro de colecciones de zonas.

Reglas:
- Gana la primera zona (en orden) con alguna parte que contiene el punto.
- Sin coincidencia y sin fallback: "outside area".
- Sin coincidencia y con fallback: la zona de centroide más cercano (excluye
  la zona centinela "Zona no identificada" y zonas sin centroide), anotada
  con " (nearest zone)". Si ninguna es elegible, no hay resultado.
- Con fallback, caer dentro de la zona centinela cuenta como "sin coincidencia".
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel
from pydantic.config import ConfigDict

from core.domain.models import (
    DATA_NOT_LOADED,
    NEAREST_QUALIFIER,
    OUTSIDE_AREA,
    UNCLASSIFIED_ZONE,
    Point,
    Zone,
)
from core.geometry import contains_any, planar_distance

logger = logging.getLogger("geozonas.zone_locator")


class MatchKind(str, Enum):
    CONTAINED = "contained"
    NEAREST = "nearest"
    OUTSIDE = "outside"
    NOT_LOADED = "not_loaded"
    NONE = "none"


class ZoneMatch(BaseModel):
    """Resultado detallado de una localización."""

    model_config = ConfigDict(frozen=True)

    kind: MatchKind
    zone: Zone | None = None

    @property
    def label(self) -> str | None:
        if self.kind is MatchKind.CONTAINED and self.zone is not None:
            return self.zone.name
        if self.kind is MatchKind.NEAREST and self.zone is not None:
            return f"{self.zone.name}{NEAREST_QUALIFIER}"
        if self.kind is MatchKind.OUTSIDE:
            return OUTSIDE_AREA
        if self.kind is MatchKind.NOT_LOADED:
            return DATA_NOT_LOADED
        return None


def _is_zone_sequence(zones: object) -> bool:
    return isinstance(zones, Sequence) and not isinstance(zones, (str, bytes))


def nearest_zone(point: Point, zones: Sequence[Zone]) -> Zone | None:
    """Zona elegible con el centroide más cercano (empates: la primera)."""

    best: Zone | None = None
    best_distance = float("inf")
    for zone in zones:
        if zone.centroid is None or zone.name == UNCLASSIFIED_ZONE:
            continue
        distance = planar_distance(point, zone.centroid)
        if distance < best_distance:
            best, best_distance = zone, distance
    return best


def find_zone(point: Point, zones: object, allow_nearest_fallback: bool = False) -> ZoneMatch:
    if not _is_zone_sequence(zones):
        logger.warning("Zone data not loaded (got %s)", type(zones).__name__)
        return ZoneMatch(kind=MatchKind.NOT_LOADED)

    for zone in zones:  # type: ignore[union-attr]
        if contains_any(point, zone.polygons):
            if allow_nearest_fallback and zone.name == UNCLASSIFIED_ZONE:
                logger.debug("Point %s inside unclassified sentinel zone", point)
                break
            return ZoneMatch(kind=MatchKind.CONTAINED, zone=zone)

    if not allow_nearest_fallback:
        return ZoneMatch(kind=MatchKind.OUTSIDE)

    nearest = nearest_zone(point, zones)  # type: ignore[arg-type]
    if nearest is None:
        logger.info("No zone eligible for nearest fallback at %s", point)
        return ZoneMatch(kind=MatchKind.NONE)
    return ZoneMatch(kind=MatchKind.NEAREST, zone=nearest)


def locate(point: Point, zones: object, allow_nearest_fallback: bool = False) -> str | None:
    """Nombre de la zona para `point`, o un centinela ("outside area", "data not loaded").

    Devuelve `None` solo cuando el fallback está activo y no hay zona elegible.
    """

    return find_zone(point, zones, allow_nearest_fallback).label
