"""Cruce de entidades del protocolo con el código de la implementación.

Flujo:
1. Espera a que la caché tenga la revisión y los ficheros ligados.
2. Por cada command/event/type sintetiza los identificadores candidatos.
3. Busca ocurrencias de palabra completa (case-sensitive) de cualquiera de
   ellos en los ficheros de su categoría, en orden de escaneo.

El matching es puramente léxico: una ocurrencia dentro de un comentario
también cuenta.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

import structlog

from core.domain.models import Category, Domain, Match, ProtocolDescription, ReferenceMap, RevisionMetadata
from core.domain.naming import canonical_name, leading_lowercase, leading_uppercase, quote_cpp_string
from core.services.source_cache import RemoteSourceCache

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SourceBinding:
    """Qué ficheros se escanean para cada categoría de entidad."""

    commands: tuple[str, ...]
    events: tuple[str, ...]
    types: tuple[str, ...]

    @classmethod
    def default(cls, *, handler_path: str, message_types_path: str) -> "SourceBinding":
        return cls(commands=(handler_path,), events=(handler_path,), types=(message_types_path,))

    def paths_for(self, category: Category) -> tuple[str, ...]:
        return getattr(self, category)

    @property
    def all_paths(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys((*self.commands, *self.events, *self.types)))


def command_candidates(domain: str, command: str) -> list[str]:
    scope = f"m::{leading_lowercase(domain)}::{leading_uppercase(command)}"
    return [f"{scope}Request", f"{scope}Response", quote_cpp_string(canonical_name(domain, command))]


def event_candidates(domain: str, event: str) -> list[str]:
    scope = f"m::{leading_lowercase(domain)}::{leading_uppercase(event)}"
    return [f"{scope}Notification", quote_cpp_string(canonical_name(domain, event))]


def type_candidates(domain: str, type_id: str) -> list[str]:
    return [f"{leading_lowercase(domain)}::{leading_uppercase(type_id)}"]


_WORD_CHAR = re.compile(r"\w")


def _anchored(needle: str) -> str:
    # Límite de palabra solo en los extremos que son caracteres de palabra;
    # un literal entre comillas empieza y acaba en '"'.
    head = r"(?<!\w)" if _WORD_CHAR.match(needle[0]) else ""
    tail = r"(?!\w)" if _WORD_CHAR.match(needle[-1]) else ""
    return head + re.escape(needle) + tail


def build_pattern(needles: Iterable[str]) -> re.Pattern[str]:
    """Alternativa de literales escapados anclada en límites de palabra."""

    return re.compile("|".join(_anchored(needle) for needle in needles))


def find_matches(path: str, text: str, needles: Sequence[str]) -> list[Match]:
    return [
        Match(path=path, text=m.group(0), offset=m.start(), length=len(m.group(0)))
        for m in build_pattern(needles).finditer(text)
    ]


class ReferenceMatcher:
    """Modelo de implementación respaldado por una `RemoteSourceCache`."""

    def __init__(
        self,
        cache: RemoteSourceCache,
        binding: SourceBinding,
        *,
        implementation_name: str | None = None,
    ) -> None:
        missing = [p for p in binding.all_paths if p not in cache.required_paths]
        if missing:
            raise ValueError(f"cache does not prefetch bound paths: {', '.join(missing)}")
        self._cache = cache
        self._binding = binding
        self._implementation_name = implementation_name

    async def extract_protocol_references(self, protocol: ProtocolDescription) -> ReferenceMap:
        revision = await self._cache.ensure_ready()
        references = ReferenceMap()
        for domain in protocol.domains:
            self._scan_domain(domain, references)
        log.info("references_extracted", commit=revision.commit_sha, **references.counts())
        return references

    async def get_revision_description(self) -> RevisionMetadata:
        return await self._cache.ensure_ready()

    async def get_data_source_description(self) -> str:
        revision = await self.get_revision_description()
        # Sin nombre configurado se atribuye al repositorio resuelto.
        name = self._implementation_name or revision.repo
        return f"{name} {revision.describe()}"

    def _scan_domain(self, domain: Domain, references: ReferenceMap) -> None:
        for command in domain.commands:
            self._collect(references, "commands", canonical_name(domain.name, command.name),
                          command_candidates(domain.name, command.name))
        for event in domain.events:
            self._collect(references, "events", canonical_name(domain.name, event.name),
                          event_candidates(domain.name, event.name))
        for type_def in domain.types:
            self._collect(references, "types", canonical_name(domain.name, type_def.id),
                          type_candidates(domain.name, type_def.id))

    def _collect(self, references: ReferenceMap, category: Category, name: str, needles: list[str]) -> None:
        for path in self._binding.paths_for(category):
            for match in find_matches(path, self._cache.get_file(path), needles):
                references.add(category, name, match)
