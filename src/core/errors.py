"""Jerarquía de errores del Core.

Resultados esperados (dirección vacía, sin coordenadas, datos no cargados) se
modelan como estados de `SearchResult`, no como excepciones.
"""

from __future__ import annotations


class GeozonasError(Exception):
    """Base de todos los errores propios de geozonas."""


class InvalidAddressError(GeozonasError, ValueError):
    """La entrada del usuario no forma una dirección utilizable."""


class GeocoderError(GeozonasError):
    """Fallo de transporte o de protocolo al consultar el geocodificador."""


class ZoneDataError(GeozonasError):
    """Archivo de zonas ausente o con formato inválido."""
