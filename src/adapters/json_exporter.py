"""Exportación JSON de respuestas.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (jq, scripts).
- Se reutiliza el alias camelCase, así el fichero coincide con la API.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel


def dump_records(records: BaseModel | Sequence[BaseModel]) -> Any:
    """Convierte un modelo (o lista de modelos) en datos JSON-serializables."""

    if isinstance(records, BaseModel):
        return records.model_dump(mode="json", by_alias=True)
    return [r.model_dump(mode="json", by_alias=True) for r in records]


def render_records_json(records: BaseModel | Sequence[BaseModel]) -> str:
    return json.dumps(dump_records(records), ensure_ascii=False, indent=2, sort_keys=True)


def export_records_json(*, records: BaseModel | Sequence[BaseModel], output_path: Path) -> Path:
    """Exporta modelos a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_records_json(records) + "\n", encoding="utf-8")
    return output_path
