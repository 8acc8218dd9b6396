"""Subregión -> región mediante la tabla estática."""

from __future__ import annotations

from core.domain.catalog import RegionMapping
from core.domain.models import OUTSIDE_AREA, UNDEFINED_REGION


def classify(subregion: str, mapping: RegionMapping | None = None) -> str:
    """Región de `subregion`. "outside area" se propaga sin consultar la tabla."""

    if subregion == OUTSIDE_AREA:
        return OUTSIDE_AREA
    mapping = mapping if mapping is not None else RegionMapping.default()
    return mapping.get(subregion) or UNDEFINED_REGION
