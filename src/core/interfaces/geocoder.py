"""Contrato del geocodificador.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el adaptador Nominatim sea intercambiable por un stub en tests
  sin acoplar el Core a HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import GeocodeCandidate


@runtime_checkable
class Geocoder(Protocol):
    """Contrato mínimo para un servicio de geocodificación.

    Reglas de diseño:
    - `geocode` es asíncrono porque típicamente hará I/O (HTTP).
    - Una lista vacía es un resultado válido ("no encontrado"), no un error.
    - Fallos de transporte se propagan como excepción (`GeocoderError` o
      `httpx.HTTPError`).
    """

    async def geocode(self, query: str) -> list[GeocodeCandidate]:
        """Devuelve los candidatos para `query`, el mejor primero."""

        ...
