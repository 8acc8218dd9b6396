"""Exportación JSON del resultado de una búsqueda.

Por qué JSON:
- Interoperabilidad con planillas de despacho y otros pipelines.
- Permite guardar el resultado sin depender de la salida de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import SearchResult


def export_result_json(*, result: SearchResult, output_path: Path) -> Path:
    """Exporta `SearchResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    payload["message"] = result.message
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
