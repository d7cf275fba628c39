"""Carga de descripciones de protocolo (JSON).

Soporta el formato de los ficheros del protocolo:
- {"domains": [{"domain": "...", "commands": [...], "events": [...], "types": [...]}]}

Varios ficheros (p.ej. browser_protocol.json + js_protocol.json) se
concatenan en el orden recibido. El esquema se considera de confianza: solo
se valida la forma mínima que necesita el cruce.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import ProtocolDescription


def load_protocol(path: Path) -> ProtocolDescription:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return ProtocolDescription.model_validate(data)


def load_protocols(paths: Iterable[Path]) -> ProtocolDescription:
    domains = []
    for path in paths:
        domains.extend(load_protocol(path).domains)
    return ProtocolDescription(domains=domains)
