"""Política de acentos para la normalización de direcciones.

Existen dos criterios razonables al filtrar caracteres: conservar letras
latinas con diacríticos (Pueyrredón, Ñandubay) o reducir todo a ASCII. La
elección se hace explícita aquí en lugar de depender del orden de las reglas.
"""

from __future__ import annotations

from enum import Enum


class AccentPolicy(str, Enum):
    """Qué letras sobreviven al filtro de caracteres."""

    PRESERVE = "preserve"
    STRIP = "strip"

    @classmethod
    def default(cls) -> "AccentPolicy":
        """Política por defecto: conservar acentos y eñes."""

        return cls.PRESERVE

    @classmethod
    def from_bool(cls, strip: bool) -> "AccentPolicy":
        return cls.STRIP if strip else cls.PRESERVE

    def label(self) -> str:
        return "ASCII only" if self is AccentPolicy.STRIP else "Latin letters with accents"
