from __future__ import annotations

import abc
import asyncio
import contextlib
import logging
from typing import Optional


class PollingSynchronizer(abc.ABC):
    """Runs `refresh()` on a fixed interval until closed.

    A failed refresh never stops the loop; the next tick simply tries again.
    Once `close()` has been called, subclasses must not touch shared state,
    even when a request that was already in flight resolves afterwards.
    """

    name = "poll"

    def __init__(self, interval_seconds: float, logger: logging.Logger) -> None:
        self._interval = interval_seconds
        self._logger = logger
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @abc.abstractmethod
    async def refresh(self) -> bool:
        """Fetch once and reconcile; returns True when state was updated."""

    async def run_forever(self) -> None:
        self._logger.info("%s loop started; poll interval=%s", self.name, self._interval)
        while not self._closed:
            try:
                await self.refresh()
            except Exception as exc:
                self._logger.exception("%s iteration failed: %s", self.name, exc)
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self._closed or self.running:
            return
        self._task = asyncio.create_task(self.run_forever(), name=f"{self.name}-poll")

    def restart(self) -> None:
        """Cancel the current loop and start a new one that fetches immediately."""
        if self._closed:
            return
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.create_task(self.run_forever(), name=f"{self.name}-poll")

    async def close(self) -> None:
        self._closed = True
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        self._logger.info("%s loop stopped", self.name)
