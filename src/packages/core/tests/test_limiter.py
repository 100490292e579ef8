"""Tests for the concurrency limiter."""
import asyncio
import time

import pytest

from email_validation_core.jobs import ConcurrencyLimiter


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        ConcurrencyLimiter(0)


@pytest.mark.parametrize("limit", [1, 2, 3, 7])
def test_never_exceeds_limit(limit):
    async def scenario():
        limiter = ConcurrencyLimiter(limit)
        observed = []

        async def unit(i):
            observed.append(limiter.in_flight)
            await asyncio.sleep(0.005)
            return i

        results = await asyncio.gather(*(limiter.run(unit, i) for i in range(10)))
        return limiter, observed, results

    limiter, observed, results = asyncio.run(scenario())
    assert results == list(range(10))
    assert max(observed) <= limit
    assert limiter.peak_in_flight == min(limit, 10)
    assert limiter.in_flight == 0
    assert limiter.waiting == 0


def test_unit_failure_stays_with_its_caller():
    async def scenario():
        limiter = ConcurrencyLimiter(2)

        async def ok():
            await asyncio.sleep(0)
            return "ok"

        async def boom():
            raise RuntimeError("boom")

        return await asyncio.gather(
            limiter.run(ok), limiter.run(boom), limiter.run(ok), return_exceptions=True
        ), limiter

    results, limiter = asyncio.run(scenario())
    assert results[0] == "ok" and results[2] == "ok"
    assert isinstance(results[1], RuntimeError)
    assert limiter.in_flight == 0


def test_waiting_units_are_admitted_in_order():
    async def scenario():
        limiter = ConcurrencyLimiter(1)
        started = []

        async def unit(i):
            started.append(i)
            await asyncio.sleep(0)

        await asyncio.gather(*(limiter.run(unit, i) for i in range(6)))
        return started

    assert asyncio.run(scenario()) == list(range(6))


def test_bounded_not_serialized():
    """Five 0.1s units with limit 2 take three rounds, not five."""

    async def scenario():
        limiter = ConcurrencyLimiter(2)
        start = time.monotonic()
        await asyncio.gather(*(limiter.run(asyncio.sleep, 0.1) for _ in range(5)))
        return time.monotonic() - start

    elapsed = asyncio.run(scenario())
    assert elapsed >= 0.3 - 0.01
    assert elapsed < 0.5
