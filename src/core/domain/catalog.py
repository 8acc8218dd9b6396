"""Configuración estática del dominio: correcciones de calles y regiones.

Se construye una vez al arrancar y se pasa explícitamente a cada componente
(normalizador, clasificador). No hay tablas globales mutables.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from pydantic import BaseModel, Field, PrivateAttr, field_validator
from pydantic.config import ConfigDict

from core.domain.accent_policy import AccentPolicy


# El orden importa: cada entrada ve el resultado de las anteriores.
DEFAULT_CORRECTIONS: tuple[tuple[str, str], ...] = (
    ("SAN MARTIN", "San Martin"),
    ("CORRIENTES", "Corrientes"),
    ("RIVADAVIA", "Rivadavia"),
    ("SANTA FE", "Santa Fe"),
    ("CORDOBA", "Córdoba"),
    ("PUEYRREDON", "Pueyrredón"),
    ("ENTRE RIOS", "Entre Ríos"),
    ("CABILDO", "Cabildo"),
    ("JUAN B. JUSTO", "Juan B. Justo"),
    ("ALVAREZ THOMAS", "Álvarez Thomas"),
    ("DEL LIBERTADOR", "del Libertador"),
)

DEFAULT_REGION_GROUPS: dict[str, tuple[str, ...]] = {
    "Capital Sur": ("Almagro", "Boedo", "San Telmo", "Recoleta", "Palermo"),
    "Capital Norte": ("Devoto", "Paternal", "Colegiales", "Saavedra"),
}

DEFAULT_CITY_QUALIFIER = "CABA"


class NormalizerConfig(BaseModel):
    """Parámetros del normalizador de direcciones."""

    model_config = ConfigDict(frozen=True)

    corrections: tuple[tuple[str, str], ...] = Field(
        default=DEFAULT_CORRECTIONS,
        description="Tabla ordenada (subcadena en mayúsculas -> reemplazo canónico).",
    )
    city_qualifier: str = Field(
        default=DEFAULT_CITY_QUALIFIER,
        min_length=1,
        description="Sufijo fijo que se agrega a la consulta del geocodificador.",
    )
    accent_policy: AccentPolicy = Field(default_factory=AccentPolicy.default)

    @field_validator("corrections", mode="before")
    @classmethod
    def corrections_as_pairs(cls, value: object) -> object:
        # JSON: un objeto conserva el orden de inserción igual que una lista de pares.
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @field_validator("corrections")
    @classmethod
    def non_empty_keys(cls, value: tuple[tuple[str, str], ...]) -> tuple[tuple[str, str], ...]:
        for key, _ in value:
            if not key:
                raise ValueError("Correction keys must be non-empty.")
        return value


class RegionMapping(BaseModel):
    """Mapa subregión -> región. La búsqueda no distingue mayúsculas."""

    model_config = ConfigDict(frozen=True)

    regions: dict[str, str] = Field(default_factory=dict)

    _index: dict[str, str] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: object) -> None:
        self._index = {name.casefold(): region for name, region in self.regions.items()}

    @classmethod
    def from_groups(cls, groups: Mapping[str, Sequence[str]]) -> "RegionMapping":
        """Construye el mapa a partir de {región: [subregiones...]}."""

        regions: dict[str, str] = {}
        for region, subregions in groups.items():
            for name in subregions:
                if name.casefold() in {k.casefold() for k in regions}:
                    raise ValueError(f"Subregion {name!r} assigned to more than one region.")
                regions[name] = region
        return cls(regions=regions)

    @classmethod
    def default(cls) -> "RegionMapping":
        return cls.from_groups(DEFAULT_REGION_GROUPS)

    def get(self, subregion: str) -> str | None:
        return self._index.get(subregion.casefold())

    def __len__(self) -> int:
        return len(self.regions)


class StaticCatalog(BaseModel):
    """Agregado de configuración estática de proceso."""

    model_config = ConfigDict(frozen=True)

    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
    regions: RegionMapping = Field(default_factory=RegionMapping.default)
