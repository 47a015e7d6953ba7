"""Exportación JSON de respuestas de la API.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (jq, notebooks).
- Permite guardar evidencia de una consulta sin volver a llamar a la API.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dumps_payload(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_payload_json(*, payload: Any, output_path: Path) -> Path:
    """Exporta una respuesta decodificada a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_payload(payload) + "\n", encoding="utf-8")
    return output_path
