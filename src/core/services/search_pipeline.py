"""Orquestación de una búsqueda de dirección.

normalizar -> geocodificar (externo) -> zona operativa (con fallback) ->
subregión (sin fallback) -> región -> `SearchResult`.

El pipeline no imprime nada: la CLI (u otro entry-point) decide cómo mostrar
el resultado. Cada búsqueda es independiente; la configuración que recibe es
de solo lectura, así que varias búsquedas pueden correr en paralelo.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from adapters.geocoder import NominatimGeocoder
from adapters.zone_loader import load_zone_catalog
from core.config import AppSettings
from core.domain.catalog import StaticCatalog
from core.domain.models import SearchResult, SearchStatus, ZoneCatalog
from core.errors import GeocoderError
from core.geometry import distance_to_boundary_m
from core.interfaces.geocoder import Geocoder
from core.normalizer import geocoder_query, normalize
from core.region_classifier import classify
from core.resources_loader import (
    DEFAULT_OPERATIONAL_ZONES_FILE,
    DEFAULT_SUBREGIONS_FILE,
    get_default_data_path,
    load_catalog,
)
from core.zone_locator import MatchKind, find_zone, locate

logger = logging.getLogger("geozonas.search")


@dataclass(frozen=True)
class SearchContext:
    """Todo lo que una búsqueda necesita, construido una vez por proceso."""

    geocoder: Geocoder
    zones: ZoneCatalog = field(default_factory=ZoneCatalog)
    catalog: StaticCatalog = field(default_factory=StaticCatalog)
    border_threshold_m: float = 100.0


def load_zones(settings: AppSettings | None = None) -> ZoneCatalog:
    """Carga las colecciones de zonas configuradas (o las de data/)."""

    settings = settings or AppSettings()
    operational_path = settings.operational_zones_path or get_default_data_path(DEFAULT_OPERATIONAL_ZONES_FILE)
    subregions_path = settings.subregions_path or get_default_data_path(DEFAULT_SUBREGIONS_FILE)
    return load_zone_catalog(
        operational_path,
        subregions_path,
        operational_name_property=settings.operational_name_property,
        subregion_name_property=settings.subregion_name_property,
    )


def build_context(settings: AppSettings | None = None) -> SearchContext:
    """Arma el contexto a partir de la configuración (Nominatim + GeoJSON locales)."""

    settings = settings or AppSettings()
    return SearchContext(
        geocoder=NominatimGeocoder(settings),
        zones=load_zones(settings),
        catalog=load_catalog(settings=settings),
        border_threshold_m=settings.border_threshold_m,
    )


async def search_address(raw: str, context: SearchContext) -> SearchResult:
    """Ejecuta una búsqueda completa. Nunca lanza por fallos de red."""

    if not raw or not raw.strip():
        return SearchResult(status=SearchStatus.EMPTY_INPUT)

    normalizer = context.catalog.normalizer
    address = normalize(raw, normalizer)
    if not address:
        return SearchResult(status=SearchStatus.EMPTY_INPUT)

    query = geocoder_query(address, normalizer)
    try:
        candidates = await context.geocoder.geocode(query)
    except (httpx.HTTPError, GeocoderError, asyncio.TimeoutError):
        logger.exception("Geocoding failed for %r", query)
        return SearchResult(status=SearchStatus.CONNECTIVITY_ERROR, address=address)

    if not candidates:
        logger.warning("No coordinates found for %r", query)
        return SearchResult(status=SearchStatus.NOT_FOUND, address=address)

    first = candidates[0]
    point = first.point

    operational = find_zone(point, context.zones.operational_zones, allow_nearest_fallback=True)
    subregion = locate(point, context.zones.subregions, allow_nearest_fallback=False)
    region = classify(subregion, context.catalog.regions)

    border_distance: float | None = None
    if operational.kind is MatchKind.CONTAINED and operational.zone is not None:
        distance = distance_to_boundary_m(point, operational.zone.polygons)
        if distance < context.border_threshold_m:
            border_distance = round(distance, 1)

    logger.info(
        "Resolved %r -> zone=%s subregion=%s region=%s",
        address,
        operational.label,
        subregion,
        region,
    )
    return SearchResult(
        status=SearchStatus.OK,
        address=address,
        display_address=first.display_name or None,
        point=point,
        operational_zone=operational.label,
        subregion=subregion,
        region=region,
        border_distance_m=border_distance,
    )
