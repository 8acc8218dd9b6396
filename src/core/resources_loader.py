"""Cargador de recursos estáticos (catálogo y rutas de datos).

Este módulo vive en `core/` porque:
- centraliza el *qué* datos necesitamos (correcciones, regiones, GeoJSON)
  sin acoplarse a la CLI
- evita duplicar lógica de paths en adaptadores.

No incluye los GeoJSON de zonas en el repo; se buscan en `data/` o se indican
por variable de entorno.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir
from core.domain.catalog import NormalizerConfig, RegionMapping, StaticCatalog
from core.errors import ZoneDataError


DEFAULT_OPERATIONAL_ZONES_FILE = "poligonos_zonas.geojson"
DEFAULT_SUBREGIONS_FILE = "subregiones.geojson"


def _project_root() -> Path:
    # core/resources_loader.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def get_default_data_path(filename: str) -> Path | None:
    """Busca un archivo de datos en ubicaciones comunes.

    Orden:
    1) $GEOZONAS_DATA_DIR/<filename>
    2) <project_root>/data/<filename>
    3) <user_config>/data/<filename>
    4) ./<filename> (cwd)
    """

    candidates: list[Path] = []
    override = (os.environ.get("GEOZONAS_DATA_DIR") or "").strip()
    if override:
        candidates.append(Path(override) / filename)
    candidates += [
        _project_root() / "data" / filename,
        get_user_config_dir() / "data" / filename,
        Path.cwd() / filename,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return None


def load_catalog(path: Path | None = None, *, settings: AppSettings | None = None) -> StaticCatalog:
    """Construye el catálogo estático.

    Formato JSON opcional:
    {
      "corrections": {"SAN MARTIN": "San Martin", ...},
      "regions": {"Capital Sur": ["Almagro", ...], ...}
    }
    Claves ausentes toman los valores por defecto. `city_qualifier` y
    `accent_policy` salen de `settings`.
    """

    settings = settings or AppSettings()
    path = path or settings.catalog_path
    overrides: dict = {}
    if path is not None:
        try:
            overrides = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ZoneDataError(f"Cannot read catalog {path}: {exc}") from exc
        if not isinstance(overrides, dict):
            raise ZoneDataError(f"Catalog {path} must be a JSON object.")

    normalizer_kwargs: dict = {
        "city_qualifier": settings.city_qualifier,
        "accent_policy": settings.accent_policy,
    }
    if "corrections" in overrides:
        normalizer_kwargs["corrections"] = overrides["corrections"]

    try:
        normalizer = NormalizerConfig(**normalizer_kwargs)
        regions = (
            RegionMapping.from_groups(overrides["regions"])
            if "regions" in overrides
            else RegionMapping.default()
        )
    except (ValidationError, ValueError, AttributeError) as exc:
        raise ZoneDataError(f"Invalid catalog: {exc}") from exc

    return StaticCatalog(normalizer=normalizer, regions=regions)
