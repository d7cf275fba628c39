"""Caché de código fuente remoto fijado a una revisión.

Responsabilidad:
- Fijar una sola vez "qué commit estamos mirando" y servir el contenido de
  ficheros exactamente en ese commit.
- Cada recurso (revisión, cada fichero y el conjunto completo) se descarga
  como mucho una vez por sesión; llamadas concurrentes comparten el trabajo.
- Un fallo no envenena la caché: la siguiente llamada reintenta.

No hay invalidación: la caché vive lo que dura la sesión/proceso.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Sequence

import structlog

from core.domain.models import RevisionMetadata
from core.interfaces.source_host import SourceHost
from core.services.shared_operation import SharedOperation

log = structlog.get_logger(__name__)


class RemoteSourceCache:
    """Caché por sesión de revisión + ficheros de un repositorio remoto."""

    def __init__(
        self,
        host: SourceHost,
        *,
        owner: str,
        repo: str,
        branch: str,
        required_paths: Sequence[str] = (),
    ) -> None:
        self._host = host
        self._owner = owner
        self._repo = repo
        self._branch = branch
        self._required_paths = tuple(dict.fromkeys(required_paths))
        self._files: dict[str, str] = {}
        self._file_ops: dict[str, SharedOperation[None]] = {}
        self._revision_op: SharedOperation[RevisionMetadata] = SharedOperation(self._resolve_revision)
        self._ready_op: SharedOperation[RevisionMetadata] = SharedOperation(self._ensure_ready)

    @property
    def required_paths(self) -> tuple[str, ...]:
        return self._required_paths

    @property
    def revision(self) -> RevisionMetadata | None:
        """Revisión ya fijada, o None si todavía no se resolvió."""

        return self._revision_op.value

    def is_cached(self, path: str) -> bool:
        return path in self._files

    async def resolve_revision(self) -> RevisionMetadata:
        return await self._revision_op.run()

    async def ensure_file(self, path: str) -> None:
        """Garantiza que `path` está en caché en la revisión fijada."""

        if path in self._files:
            return
        op = self._file_ops.get(path)
        if op is None:
            op = SharedOperation(lambda: self._fetch_file(path))
            self._file_ops[path] = op
        await op.run()

    async def ensure_all(self, paths: Iterable[str]) -> None:
        missing = [p for p in dict.fromkeys(paths) if p not in self._files]
        if not missing:
            return
        await asyncio.gather(*(self.ensure_file(p) for p in missing))

    async def ensure_ready(self) -> RevisionMetadata:
        """Revisión + todos los ficheros requeridos, memoizado como una unidad."""

        return await self._ready_op.run()

    def get_file(self, path: str) -> str:
        """Texto cacheado de `path`; requiere haber esperado a `ensure_file`/`ensure_all`."""

        try:
            return self._files[path]
        except KeyError:
            raise KeyError(f"{path} has not been fetched; await ensure_file() first") from None

    async def _resolve_revision(self) -> RevisionMetadata:
        commit_sha = await self._host.resolve_branch_revision(self._owner, self._repo, self._branch)
        revision = RevisionMetadata(owner=self._owner, repo=self._repo, commit_sha=commit_sha)
        log.info("revision_resolved", owner=self._owner, repo=self._repo, branch=self._branch, commit=commit_sha)
        return revision

    async def _fetch_file(self, path: str) -> None:
        # El contenido y la revisión nunca pueden discrepar.
        revision = await self.resolve_revision()
        if path in self._files:
            return
        text = await self._host.fetch_file_at_revision(revision.owner, revision.repo, revision.commit_sha, path)
        self._files[path] = text
        log.info("file_fetched", path=path, commit=revision.commit_sha, size=len(text))

    async def _ensure_ready(self) -> RevisionMetadata:
        try:
            revision = await self.resolve_revision()
            await self.ensure_all(self._required_paths)
        except Exception as exc:
            log.warning("ensure_failed", error=str(exc), error_type=type(exc).__name__)
            raise
        return revision
