"""Fetch scope — ties in-flight reads to the lifetime of a view.

A view opens one FetchScope, runs every fetch through it and closes it on
teardown. Closing cancels whatever is still pending, so a torn-down view
never receives late results.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

logger = logging.getLogger(__name__)


class FetchScope:
    """Tracks fetch tasks and cancels the pending ones on close."""

    def __init__(self, name: str = "view"):
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_count(self) -> int:
        """Number of tasks still running."""
        return sum(1 for t in self._tasks if not t.done())

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedule `coro` as a task owned by this scope."""
        if self._closed:
            coro.close()
            raise RuntimeError(f"Fetch scope '{self.name}' is closed")
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def gather(self, *coros: Coroutine[Any, Any, Any]) -> list[Any]:
        """Run coroutines concurrently and wait for all of them.

        Results come back in argument order. The first exception propagates
        once the others have been cancelled and have finished.
        """
        tasks = [self.spawn(c) for c in coros]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def cancel(self) -> int:
        """Request cancellation of every pending task. Returns how many."""
        pending = [t for t in self._tasks if not t.done()]
        for t in pending:
            t.cancel()
        return len(pending)

    async def aclose(self) -> None:
        """Close the scope, cancel pending tasks and wait for them to settle."""
        if self._closed:
            return
        self._closed = True
        pending = [t for t in self._tasks if not t.done()]
        if pending:
            logger.info("Cancelling %d in-flight fetches for %s", len(pending), self.name)
            for t in pending:
                t.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    async def __aenter__(self) -> FetchScope:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

