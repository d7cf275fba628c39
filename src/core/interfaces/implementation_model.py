"""Contrato de un modelo de implementación del protocolo."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ProtocolDescription, ReferenceMap, RevisionMetadata


@runtime_checkable
class ImplementationModel(Protocol):
    """Cruza un `ProtocolDescription` con el código de una implementación.

    Reglas de diseño:
    - No hay resultados parciales: o se devuelve el mapa completo o se
      propaga un `FetchError`.
    - `get_revision_description` expone la revisión exacta escaneada.
    """

    async def extract_protocol_references(self, protocol: ProtocolDescription) -> ReferenceMap: ...

    async def get_revision_description(self) -> RevisionMetadata: ...

    async def get_data_source_description(self) -> str: ...
