"""Exportación JSON del resultado del cruce.

Por qué JSON:
- Interoperabilidad con visores del protocolo y otros pipelines.
- Incluye la revisión exacta para que el resultado sea reproducible.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import ReferenceMap, RevisionMetadata


def build_payload(*, references: ReferenceMap, revision: RevisionMetadata) -> dict[str, Any]:
    return {
        "revision": {**revision.model_dump(mode="json"), "commit_url": revision.commit_url},
        "references": references.model_dump(mode="json"),
    }


def dumps_references(*, references: ReferenceMap, revision: RevisionMetadata) -> str:
    payload = build_payload(references=references, revision=revision)
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def export_references_json(*, references: ReferenceMap, revision: RevisionMetadata, output_path: Path) -> Path:
    """Exporta el `ReferenceMap` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_references(references=references, revision=revision), encoding="utf-8")
    return output_path
