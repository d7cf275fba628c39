"""Contrato del host remoto de código fuente.

Por qué Protocol:
- El Core no sabe nada de GitHub ni de HTTP; solo necesita "dame el commit
  actual de esta rama" y "dame este fichero en este commit".
- Los tests sustituyen el host por stubs que cuentan llamadas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SourceHost(Protocol):
    """Colaborador remoto que aloja el repositorio de la implementación.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque hacen I/O.
    - Una respuesta no exitosa se reporta con `ResolutionError` / `FetchError`.
    """

    async def resolve_branch_revision(self, owner: str, repo: str, branch: str) -> str:
        """Devuelve el hash del commit al que apunta `branch` ahora mismo."""

        ...

    async def fetch_file_at_revision(self, owner: str, repo: str, commit_sha: str, path: str) -> str:
        """Devuelve el texto completo de `path` en `commit_sha`."""

        ...
