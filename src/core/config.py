"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/GeoJSON) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.accent_policy import AccentPolicy


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "geozonas"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "geozonas"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "geozonas"
    return Path.home() / ".config" / "geozonas"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# geozonas user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEOZONAS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request al geocodificador (segundos).",
    )
    user_agent: str = Field(
        default="geozonas/0.1 (+https://local)",
        min_length=1,
        description="User-Agent exigido por la política de uso de Nominatim.",
    )
    geocoder_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        min_length=8,
        description="Endpoint de búsqueda compatible con Nominatim.",
    )
    city_qualifier: str = Field(
        default="CABA",
        min_length=1,
        description="Ciudad que se agrega a cada consulta.",
    )

    operational_zones_path: Path | None = Field(
        default=None,
        description="GeoJSON de zonas operativas (p.ej. poligonos_zonas.geojson).",
    )
    subregions_path: Path | None = Field(
        default=None,
        description="GeoJSON de subregiones.",
    )
    catalog_path: Path | None = Field(
        default=None,
        description="JSON opcional con correcciones de calles y mapa de regiones.",
    )
    operational_name_property: str = Field(
        default="operacion",
        min_length=1,
        description="Propiedad GeoJSON con el nombre de la zona operativa.",
    )
    subregion_name_property: str = Field(
        default="nombre",
        min_length=1,
        description="Propiedad GeoJSON con el nombre de la subregión.",
    )

    border_threshold_m: float = Field(
        default=100.0,
        ge=0,
        description="Se informa la distancia al borde de la zona si es menor a este umbral.",
    )
    accent_policy: AccentPolicy = Field(
        default=AccentPolicy.PRESERVE,
        description="Conservar (preserve) o eliminar (strip) letras acentuadas al normalizar.",
    )

    log_level: str = Field(default="INFO", description="Nivel del logger 'geozonas'.")
    log_file: Path | None = Field(
        default=None,
        description="Archivo de log adicional (p.ej. logs/geozonas.log).",
    )
