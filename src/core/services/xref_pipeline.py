"""Cableado del cruce protocolo <-> implementación.

Este módulo junta configuración, host remoto, caché y matcher para que los
entry-points (CLI, tests, futuros servicios) no repitan el montaje.
"""

from __future__ import annotations

from adapters.github_source import GitHubSourceHost
from core.config import AppSettings
from core.interfaces.source_host import SourceHost
from core.services.reference_matcher import ReferenceMatcher, SourceBinding
from core.services.source_cache import RemoteSourceCache


def default_binding(settings: AppSettings) -> SourceBinding:
    return SourceBinding.default(
        handler_path=settings.handler_source_path,
        message_types_path=settings.message_types_path,
    )


def build_reference_matcher(
    settings: AppSettings | None = None,
    *,
    host: SourceHost | None = None,
    binding: SourceBinding | None = None,
) -> ReferenceMatcher:
    """Monta un `ReferenceMatcher` con su propia caché de sesión."""

    settings = settings or AppSettings()
    binding = binding or default_binding(settings)
    cache = RemoteSourceCache(
        host or GitHubSourceHost(settings),
        owner=settings.repo_owner,
        repo=settings.repo_name,
        branch=settings.repo_branch,
        required_paths=binding.all_paths,
    )
    return ReferenceMatcher(cache, binding, implementation_name=settings.implementation_name)
