"""Concurrency limiter for asynchronous units of work."""
import asyncio
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


class ConcurrencyLimiter:
    """Runs at most ``limit`` coroutines at a time.

    Excess callers wait on the semaphore and are admitted in roughly FIFO order
    as slots free up. The waiting queue is unbounded: submitters get no
    backpressure signal. A unit's exception is re-raised to its own caller and
    never affects other units.
    """

    def __init__(self, limit: int):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self.in_flight = 0
        self.waiting = 0
        self.peak_in_flight = 0

    async def run(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Wait for a free slot, then run ``fn(*args, **kwargs)``."""
        self.waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self.waiting -= 1
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            return await fn(*args, **kwargs)
        finally:
            self.in_flight -= 1
            self._semaphore.release()
