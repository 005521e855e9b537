"""Asyncio driver that feeds elapsed wall time to a :class:`Ticker`."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from worldchat.hooks.contracts import Ticker

logger = logging.getLogger(__name__)


class TickLoop:
    """Calls ``ticker.on_update(diff_ms)`` every *interval* seconds.

    ``diff_ms`` is measured with a monotonic clock, so it is never
    negative even if the wall clock jumps.
    """

    def __init__(
        self,
        ticker: Ticker,
        interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ticker = ticker
        self.interval = interval
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self._last: float | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking on the running event loop."""
        if self.running:
            return
        self._last = self._clock()
        self._task = asyncio.create_task(self._run())
        logger.debug("Tick loop started (interval=%.3fs)", self.interval)

    async def stop(self) -> None:
        """Stop ticking and wait for the loop task to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug("Tick loop stopped after %d ticks", self.ticks)

    def tick(self) -> int:
        """Run one update now and return the elapsed milliseconds passed on."""
        now = self._clock()
        last = self._last if self._last is not None else now
        diff_ms = max(0, int(round((now - last) * 1000)))
        self._last = now
        self.ticks += 1
        try:
            self.ticker.on_update(diff_ms)
        except Exception:
            logger.exception("Ticker raised during update")
        return diff_ms

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick()
