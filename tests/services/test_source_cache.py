"""Tests for the remote source cache."""

from __future__ import annotations

import asyncio

import pytest

from conftest import HANDLER, MESSAGE_TYPES, SHA, StubSourceHost
from core.domain.errors import FetchError, ResolutionError
from core.services.source_cache import RemoteSourceCache


def _cache(host: StubSourceHost) -> RemoteSourceCache:
    return RemoteSourceCache(
        host,
        owner="facebook",
        repo="hermes",
        branch="main",
        required_paths=(HANDLER, MESSAGE_TYPES, HANDLER),
    )


class TestResolveRevision:
    @pytest.mark.asyncio
    async def test_resolves_once(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        assert cache.revision is None
        first = await cache.resolve_revision()
        second = await cache.resolve_revision()
        assert first is second
        assert first.commit_sha == SHA
        assert (first.owner, first.repo) == ("facebook", "hermes")
        assert stub_host.revision_calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_resolution_is_coalesced(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        await asyncio.gather(*(cache.resolve_revision() for _ in range(5)))
        assert stub_host.revision_calls == 1

    @pytest.mark.asyncio
    async def test_failed_resolution_can_be_retried(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        stub_host.fail_revision = 500
        with pytest.raises(ResolutionError):
            await cache.resolve_revision()
        assert cache.revision is None

        stub_host.fail_revision = None
        revision = await cache.resolve_revision()
        assert revision.commit_sha == SHA
        assert stub_host.revision_calls == 2


class TestFiles:
    @pytest.mark.asyncio
    async def test_ensure_file_is_idempotent(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        await cache.ensure_file(HANDLER)
        await cache.ensure_file(HANDLER)
        assert stub_host.file_calls == [HANDLER]
        assert cache.is_cached(HANDLER)
        assert "PauseRequest" in cache.get_file(HANDLER)

    @pytest.mark.asyncio
    async def test_ensure_file_waits_for_revision(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        await cache.ensure_file(MESSAGE_TYPES)
        assert stub_host.revision_calls == 1
        assert cache.revision is not None

    @pytest.mark.asyncio
    async def test_concurrent_ensure_file_fetches_once(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        await asyncio.gather(cache.ensure_file(HANDLER), cache.ensure_file(HANDLER))
        assert stub_host.file_calls == [HANDLER]

    @pytest.mark.asyncio
    async def test_ensure_all_fetches_each_missing_path(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        await cache.ensure_file(HANDLER)
        await cache.ensure_all([HANDLER, MESSAGE_TYPES])
        assert sorted(stub_host.file_calls) == sorted([HANDLER, MESSAGE_TYPES])

    @pytest.mark.asyncio
    async def test_fetch_error_carries_status(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        stub_host.fail_paths[MESSAGE_TYPES] = 404
        with pytest.raises(FetchError) as excinfo:
            await cache.ensure_file(MESSAGE_TYPES)
        assert excinfo.value.status_code == 404
        assert excinfo.value.path == MESSAGE_TYPES
        assert not cache.is_cached(MESSAGE_TYPES)

    def test_get_file_before_ensure_raises(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        with pytest.raises(KeyError):
            cache.get_file(HANDLER)


class TestEnsureReady:
    @pytest.mark.asyncio
    async def test_concurrent_calls_make_one_round_trip_set(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        first, second = await asyncio.gather(cache.ensure_ready(), cache.ensure_ready())
        assert first is second
        assert stub_host.revision_calls == 1
        assert sorted(stub_host.file_calls) == sorted([HANDLER, MESSAGE_TYPES])

        await cache.ensure_ready()
        assert stub_host.revision_calls == 1
        assert len(stub_host.file_calls) == 2

    @pytest.mark.asyncio
    async def test_failure_clears_memo_and_retries(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        stub_host.fail_paths[MESSAGE_TYPES] = 503
        results = await asyncio.gather(cache.ensure_ready(), cache.ensure_ready(), return_exceptions=True)
        assert all(isinstance(r, FetchError) for r in results)
        assert stub_host.file_calls.count(MESSAGE_TYPES) == 1

        del stub_host.fail_paths[MESSAGE_TYPES]
        revision = await cache.ensure_ready()

        assert revision.commit_sha == SHA
        assert stub_host.file_calls.count(MESSAGE_TYPES) == 2
        # Already-fetched content and the pinned revision are reused.
        assert stub_host.file_calls.count(HANDLER) == 1
        assert stub_host.revision_calls == 1

    @pytest.mark.asyncio
    async def test_revision_failure_retries_everything(self, stub_host: StubSourceHost) -> None:
        cache = _cache(stub_host)
        stub_host.fail_revision = 403
        with pytest.raises(ResolutionError):
            await cache.ensure_ready()
        assert stub_host.file_calls == []

        stub_host.fail_revision = None
        await cache.ensure_ready()
        assert stub_host.revision_calls == 2
        assert len(stub_host.file_calls) == 2
