"""Periodic background refresh of the coin snapshot."""

from __future__ import annotations

import asyncio
import logging

from .builder import SnapshotBuilder
from .errors import UpstreamError

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs SnapshotBuilder.build() immediately on start and then every `interval` seconds.

    Each tick is a fire-and-forget task, so a slow build may still be running
    when the next tick fires. Whether that second tick sweeps the upstream
    again is the builder's coalescing policy. Failures are logged and the next
    tick retries; nothing waits on a scheduled build.
    """

    def __init__(self, builder: SnapshotBuilder, interval: float) -> None:
        self._builder = builder
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._ticks: set[asyncio.Task] = set()
        self.tick_count: int = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Begin refreshing. Returns without waiting for the warm-up build."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run_loop(), name="snapshot-refresh")
        logger.info("Refresh scheduler started: %.1fs interval", self._interval)

    async def stop(self) -> None:
        """Cancel the loop and any tick still building. Safe to call multiple times."""
        pending = [t for t in (self._task, *self._ticks) if t is not None and not t.done()]
        for task in pending:
            task.cancel()
        for task in pending:
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self._builder.cancel()
        self._task = None
        self._ticks.clear()
        logger.info("Refresh scheduler stopped")

    async def _run_loop(self) -> None:
        """Fire a build, sleep, repeat. The first build is the cache warm-up."""
        while True:
            self.tick_count += 1
            tick = asyncio.create_task(self._tick(), name=f"snapshot-refresh-{self.tick_count}")
            self._ticks.add(tick)
            tick.add_done_callback(self._ticks.discard)
            await asyncio.sleep(self._interval)

    async def _tick(self) -> None:
        try:
            await self._builder.build()
        except UpstreamError as e:
            logger.warning("Scheduled refresh failed, keeping previous snapshot: %s", e)
        except Exception:
            logger.exception("Scheduled refresh crashed")
