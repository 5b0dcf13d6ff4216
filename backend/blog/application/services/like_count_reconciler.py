"""Like Count Reconciler — asyncio daemon that repairs drifted like counters."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class LikeCountReconciler:
    """Periodically recomputes article like counters from the like rows.

    Runs as an asyncio.Task inside FastAPI's lifespan. ``reconcile`` is the
    bound ``EngagementService.reconcile_like_counts`` of an elevated client,
    so the pass can see every user's like rows.
    """

    def __init__(self, reconcile: Callable[[], Awaitable[int]], interval: float) -> None:
        self._reconcile = reconcile
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the reconciliation loop."""
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("LikeCountReconciler started (interval=%ss)", self._interval)

    async def stop(self) -> None:
        """Gracefully stop the reconciliation loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        logger.info("LikeCountReconciler stopped")

    async def run_once(self) -> int:
        corrected = await self._reconcile()
        if corrected:
            logger.info("Like reconciliation corrected %d article(s)", corrected)
        return corrected

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            try:
                await self.run_once()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("LikeCountReconciler pass failed")
