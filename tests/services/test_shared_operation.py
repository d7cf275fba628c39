"""Tests for the idle/pending/resolved shared operation."""

from __future__ import annotations

import asyncio

import pytest

from core.services.shared_operation import OperationState, SharedOperation


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_run() -> None:
    calls = 0
    gate = asyncio.Event()

    async def work() -> int:
        nonlocal calls
        calls += 1
        await gate.wait()
        return 42

    op = SharedOperation(work)
    first = asyncio.ensure_future(op.run())
    second = asyncio.ensure_future(op.run())
    await asyncio.sleep(0)
    assert op.state is OperationState.PENDING

    gate.set()
    assert await asyncio.gather(first, second) == [42, 42]
    assert calls == 1
    assert op.state is OperationState.RESOLVED
    assert await op.run() == 42
    assert calls == 1


@pytest.mark.asyncio
async def test_failure_returns_to_idle_and_retries() -> None:
    attempts = 0

    async def flaky() -> str:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("boom")
        return "ok"

    op = SharedOperation(flaky)
    with pytest.raises(RuntimeError):
        await op.run()
    assert op.state is OperationState.IDLE
    assert op.value is None

    assert await op.run() == "ok"
    assert attempts == 2


@pytest.mark.asyncio
async def test_failure_reaches_every_waiter() -> None:
    async def broken() -> None:
        await asyncio.sleep(0)
        raise ValueError("nope")

    op = SharedOperation(broken)
    results = await asyncio.gather(op.run(), op.run(), return_exceptions=True)
    assert all(isinstance(r, ValueError) for r in results)
    assert op.state is OperationState.IDLE
