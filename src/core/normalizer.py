"""Normalización de direcciones para el geocodificador.

La normalización es una cadena ordenada de reglas (`Rule`) aplicada con un
único `reduce` sobre el texto. El orden es parte del contrato: las reglas
posteriores operan sobre la salida de las anteriores y las correcciones de
calles pueden solaparse entre sí.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Sequence

from core.domain.accent_policy import AccentPolicy
from core.domain.catalog import NormalizerConfig
from core.errors import InvalidAddressError


@dataclass(frozen=True)
class Rule:
    """Una regla de reescritura: nombre legible + función str -> str."""

    name: str
    apply: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.apply(text)


def replace_first(match: str, replacement: str, *, name: str | None = None) -> Rule:
    """Reemplazo literal, solo la primera aparición."""

    return Rule(name or f"{match!r}->{replacement!r}", lambda s: s.replace(match, replacement, 1))


def regex_rule(pattern: str, replacement: str, *, name: str, flags: int = 0, count: int = 0) -> Rule:
    compiled = re.compile(pattern, flags)
    return Rule(name, lambda s: compiled.sub(replacement, s, count=count))


# Abreviaturas de títulos en nombres de calles (primera aparición).
TITLE_ABBREVIATIONS: tuple[tuple[str, str], ...] = (
    ("CNEL.", "Coronel"),
    ("GRAL.", "General"),
    ("PRES.", "Presidente"),
    ("PTE.", "Presidente"),
    ("ING.", "Ingeniero"),
)

_KEEP_PATTERNS = {
    # Latin-1 + Latin Extended-A, sin × ni ÷.
    AccentPolicy.PRESERVE: r"[^0-9A-Za-zÀ-ÖØ-öø-ſ\s]",
    AccentPolicy.STRIP: r"[^0-9A-Za-z\s]",
}


def build_rules(config: NormalizerConfig) -> tuple[Rule, ...]:
    """Arma la cadena completa de reglas para una configuración."""

    rules: list[Rule] = [Rule("uppercase", str.upper)]
    rules.extend(replace_first(key, value, name=f"correction:{key}") for key, value in config.corrections)
    rules.extend(
        [
            regex_rule(r"\s*\([^)]*\)\s*", " ", name="strip-parentheses"),
            regex_rule(r"^\s*AV(?:\.\s*|\s+)", "Avenida ", name="leading-avenue", flags=re.IGNORECASE, count=1),
        ]
    )
    rules.extend(replace_first(key, value) for key, value in TITLE_ABBREVIATIONS)
    rules.extend(
        [
            regex_rule(r" y ", " E ", name="intersection", flags=re.IGNORECASE),
            regex_rule(_KEEP_PATTERNS[config.accent_policy], "", name="character-filter"),
            regex_rule(r"\s+", " ", name="collapse-whitespace"),
            Rule("trim", str.strip),
        ]
    )
    return tuple(rules)


_DEFAULT_CONFIG = NormalizerConfig()
_DEFAULT_RULES = build_rules(_DEFAULT_CONFIG)


def apply_rules(text: str, rules: Sequence[Rule]) -> str:
    return reduce(lambda acc, rule: rule(acc), rules, text)


def normalize(raw: str, config: NormalizerConfig | None = None) -> str:
    """Devuelve la forma canónica de una dirección libre.

    Nunca falla: una entrada vacía o solo con espacios devuelve "". El llamador
    debe evitar geocodificar un resultado vacío.
    """

    if not raw:
        return ""
    rules = _DEFAULT_RULES if config is None or config == _DEFAULT_CONFIG else build_rules(config)
    return apply_rules(raw, rules)


def build_raw_address(street: str, number: str | int | None = None) -> str:
    """Une calle y altura. La altura, si se indica, debe ser solo dígitos."""

    street = (street or "").strip()
    if number is None:
        return street
    height = str(number).strip()
    if not height:
        return street
    if not height.isdigit() or not height.isascii():
        raise InvalidAddressError(f"Height {height!r} is not a valid number.")
    return f"{street} {height}".strip()


def geocoder_query(normalized: str, config: NormalizerConfig | None = None) -> str:
    """Consulta final: '{dirección normalizada}, {ciudad}'."""

    city = (config or _DEFAULT_CONFIG).city_qualifier
    return f"{normalized}, {city}"
