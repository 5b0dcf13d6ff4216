"""Unit tests for the periodic like-counter reconciliation task."""

import asyncio

import pytest

from blog.application.services import LikeCountReconciler


@pytest.mark.asyncio
async def test_run_once_returns_corrections():
    async def reconcile() -> int:
        return 3

    assert await LikeCountReconciler(reconcile, interval=60).run_once() == 3


@pytest.mark.asyncio
async def test_loop_runs_periodically_and_survives_failures():
    passes = []

    async def reconcile() -> int:
        passes.append(1)
        if len(passes) == 1:
            raise RuntimeError("transient")
        return 0

    reconciler = LikeCountReconciler(reconcile, interval=0.01)
    await reconciler.start()
    for _ in range(100):
        if len(passes) >= 3:
            break
        await asyncio.sleep(0.01)
    await reconciler.stop()

    assert len(passes) >= 3


@pytest.mark.asyncio
async def test_stop_cancels_a_sleeping_loop():
    async def reconcile() -> int:
        raise AssertionError("should not run before the first interval elapses")

    reconciler = LikeCountReconciler(reconcile, interval=3600)
    await reconciler.start()
    await reconciler.stop()
