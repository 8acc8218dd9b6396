"""Geocodificador: Nominatim (OpenStreetMap).

Implementación:
- `GET {geocoder_url}?q=<consulta>&format=json&limit=1&addressdetails=1`
- La respuesta es una lista JSON; cada item trae `display_name`, `lat` y
  `lon` como strings numéricos.

Notas:
- Lista vacía => no encontrado (no es error).
- HTTP != 2xx, JSON inválido o items sin coordenadas => `GeocoderError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import GeocodeCandidate
from core.errors import GeocoderError
from core.interfaces.geocoder import Geocoder

logger = logging.getLogger("geozonas.geocoder")


def parse_candidates(payload: Any) -> list[GeocodeCandidate]:
    if not isinstance(payload, list):
        raise GeocoderError(f"Unexpected geocoder payload: {type(payload).__name__}")
    try:
        return [GeocodeCandidate.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise GeocoderError(f"Malformed geocoder candidate: {exc}") from exc


class NominatimGeocoder(Geocoder):
    """Consulta el endpoint de búsqueda de Nominatim."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        limit: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._limit = limit
        self._transport = transport

    async def geocode(self, query: str) -> list[GeocodeCandidate]:
        params = {
            "q": query,
            "format": "json",
            "limit": str(self._limit),
            "addressdetails": "1",
        }
        async with build_async_client(self._settings, transport=self._transport) as client:
            response = await client.get(self._settings.geocoder_url, params=params)

        if response.status_code != 200:
            raise GeocoderError(f"HTTP {response.status_code} from geocoder")

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocoderError("Geocoder returned invalid JSON") from exc

        candidates = parse_candidates(payload)
        if not candidates:
            logger.warning("Nominatim returned no results for %r", query)
        return candidates
