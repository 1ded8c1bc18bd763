"""Tests for zenith/inspiration.py: per-date fetch scheduling."""

import asyncio
import random

import pytest

from zenith.inspiration import (
    DEFAULT_QUOTE,
    MOTIVATIONAL_QUOTES,
    InspirationScheduler,
    StaticInspirationProvider,
    daily_dua,
)
from zenith.records import apply_inspiration, materialize, set_quote

DAY = "2026-03-01"


class GatedProvider:
    """Provider that blocks until released, counting calls."""

    def __init__(self, text="Fetched"):
        self.text = text
        self.calls = []
        self.gate = asyncio.Event()

    async def __call__(self, profile_name):
        self.calls.append(profile_name)
        await self.gate.wait()
        return self.text


def test_static_provider_picks_bundled_quote():
    provider = StaticInspirationProvider(rng=random.Random(1))
    assert asyncio.run(provider("Sam")) in MOTIVATIONAL_QUOTES


def test_request_applies_result(state):
    async def main():
        sched = InspirationScheduler(StaticInspirationProvider(("Hello",)), lambda d, t: apply_inspiration(state, d, t))
        return await sched.request(DAY, "Sam")

    assert asyncio.run(main()) is True
    assert state.records[DAY].custom_quote == "Hello"


def test_in_flight_guard_deduplicates(state):
    async def main():
        provider = GatedProvider()
        sched = InspirationScheduler(provider, lambda d, t: apply_inspiration(state, d, t))
        first = sched.request(DAY, "Sam")
        second = sched.request(DAY, "Sam")
        assert first is second
        await asyncio.sleep(0)
        assert sched.in_flight(DAY)
        provider.gate.set()
        await first
        assert not sched.in_flight(DAY)
        return provider.calls

    assert asyncio.run(main()) == ["Sam"]


def test_late_result_does_not_overwrite_user_quote(state):
    async def main():
        provider = GatedProvider("Fetched")
        sched = InspirationScheduler(provider, lambda d, t: apply_inspiration(state, d, t))
        task = sched.request(DAY, "Sam")
        await asyncio.sleep(0)
        set_quote(state, materialize(state, DAY), "Typed by me")
        provider.gate.set()
        return await task

    assert asyncio.run(main()) is False
    assert state.records[DAY].custom_quote == "Typed by me"


def test_provider_failure_falls_back(state):
    async def broken(profile_name):
        raise RuntimeError("provider down")

    async def main():
        sched = InspirationScheduler(broken, lambda d, t: apply_inspiration(state, d, t))
        return await sched.request(DAY, "Sam")

    assert asyncio.run(main()) is True
    assert state.records[DAY].custom_quote == DEFAULT_QUOTE


def test_provider_timeout_falls_back(state):
    async def slow(profile_name):
        await asyncio.sleep(5)
        return "Too late"

    async def main():
        sched = InspirationScheduler(slow, lambda d, t: apply_inspiration(state, d, t), timeout=0.01)
        return await sched.request(DAY, "Sam")

    assert asyncio.run(main()) is True
    assert state.records[DAY].custom_quote == DEFAULT_QUOTE


def test_blank_result_falls_back(state):
    async def blank(profile_name):
        return "   "

    async def main():
        sched = InspirationScheduler(blank, lambda d, t: apply_inspiration(state, d, t))
        await sched.request(DAY, "Sam")

    asyncio.run(main())
    assert state.records[DAY].custom_quote == DEFAULT_QUOTE


def test_cancel_discards_result(state):
    merged = []

    async def main():
        provider = GatedProvider()
        sched = InspirationScheduler(provider, lambda d, t: merged.append((d, t)) or True)
        task = sched.request(DAY, "Sam")
        await asyncio.sleep(0)
        assert sched.cancel(DAY) is True
        with pytest.raises(asyncio.CancelledError):
            await task
        assert sched.cancel(DAY) is False

    asyncio.run(main())
    assert merged == []
    assert state.records == {}


def test_daily_dua_rotates_by_weekday():
    # 2026-03-01 is a Sunday, 2026-03-02 a Monday.
    assert daily_dua("2026-03-01")["dua"] == "Subhan-Allahi wa bihamdihi"
    assert daily_dua("2026-03-02")["dua"] == "Alhamdulillah"
    # Friday (5) wraps around the five duas.
    assert daily_dua("2026-03-06")["dua"] == "Subhan-Allahi wa bihamdihi"


def test_cancel_all_cancels_every_day(state):
    provider = GatedProvider()
    sched = InspirationScheduler(provider, lambda d, t: apply_inspiration(state, d, t))

    async def main():
        tasks = [sched.request(d, "Sam") for d in (DAY, "2026-03-02")]
        await asyncio.sleep(0)
        sched.cancel_all()
        provider.gate.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        assert all(isinstance(r, asyncio.CancelledError) for r in results)
        assert not sched.in_flight(DAY)

    asyncio.run(main())
    assert state.records == {}
