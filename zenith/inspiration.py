"""Daily inspiration: providers, the per-date fetch scheduler and daily duas.

A provider is any ``async (profile_name) -> str`` callable. The scheduler runs
at most one fetch per date and hands the result to a merge callback that must
only fill a quote that is still unset, so a slow response never overwrites a
quote that arrived first.
"""

from __future__ import annotations

import asyncio
import logging
import random
import threading
from datetime import date
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

InspirationProvider = Callable[[str], Awaitable[str]]

DEFAULT_QUOTE = "Success is the steady pursuit of your highest potential."

MOTIVATIONAL_QUOTES = (
    "Your only limit is your mind.",
    "Small daily improvements are the key to staggering long-term results.",
    "Focus on being productive instead of busy.",
    "Success is the sum of small efforts, repeated day in and day out.",
    "The secret of getting ahead is getting started.",
)

DAILY_DUAS = (
    {"dua": "Subhan-Allahi wa bihamdihi", "meaning": "Glory be to Allah and His is the praise."},
    {"dua": "Alhamdulillah", "meaning": "Praise be to Allah."},
    {"dua": "La ilaha illallah", "meaning": "There is no god but Allah."},
    {"dua": "Astaghfirullah", "meaning": "I seek forgiveness from Allah."},
    {
        "dua": "Hasbunallahu wa ni'mal wakil",
        "meaning": "Sufficient for us is Allah, and [He is] the best Disposer of affairs.",
    },
)


def daily_dua(day: str) -> dict[str, str]:
    """Dua of the day, rotating by weekday (Sunday first)."""
    weekday = (date.fromisoformat(day).weekday() + 1) % 7
    return DAILY_DUAS[weekday % len(DAILY_DUAS)]


class StaticInspirationProvider:
    """Offline provider that picks from the bundled quotes."""

    def __init__(self, quotes: tuple[str, ...] = MOTIVATIONAL_QUOTES, rng: random.Random | None = None):
        self.quotes = quotes
        self.rng = rng or random.Random()

    async def __call__(self, profile_name: str) -> str:
        return self.rng.choice(self.quotes)


class InspirationScheduler:
    """Runs one background fetch per date and merges results on completion.

    ``merge(day, text)`` is called with the fetched quote, or DEFAULT_QUOTE if
    the provider failed, and returns whether the quote was applied.

    ``request`` runs on the event loop. ``cancel`` and ``cancel_all`` may be
    called from any thread; cancellation is handed to the task's own loop.
    """

    def __init__(
        self,
        provider: InspirationProvider,
        merge: Callable[[str, str], bool],
        timeout: float | None = None,
    ):
        self.provider = provider
        self.merge = merge
        self.timeout = timeout
        self._in_flight: dict[str, asyncio.Task] = {}
        self._guard = threading.Lock()
        # Bumped by cancel_all; fetches started under an older value never merge.
        self._generation = 0

    def request(self, day: str, profile_name: str) -> asyncio.Task:
        """Start a fetch for *day* unless one is already running.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()
        with self._guard:
            existing = self._in_flight.get(day)
            if existing is not None and not existing.done():
                return existing
            task = loop.create_task(self._run(day, profile_name, self._generation))
            self._in_flight[day] = task
        logger.debug("Inspiration fetch started for %s", day)
        return task

    def in_flight(self, day: str) -> bool:
        with self._guard:
            task = self._in_flight.get(day)
        return task is not None and not task.done()

    def cancel(self, day: str) -> bool:
        with self._guard:
            task = self._in_flight.pop(day, None)
        if task is None or task.done():
            return False
        return _cancel_on_loop(task)

    def cancel_all(self) -> None:
        with self._guard:
            self._generation += 1
            days = list(self._in_flight)
        for day in days:
            self.cancel(day)

    async def _run(self, day: str, profile_name: str, generation: int) -> bool:
        try:
            try:
                if self.timeout:
                    text = await asyncio.wait_for(self.provider(profile_name), self.timeout)
                else:
                    text = await self.provider(profile_name)
            except Exception as e:
                logger.warning("Inspiration provider failed for %s: %s", day, e)
                text = DEFAULT_QUOTE
            if generation != self._generation:
                logger.debug("Dropping inspiration for %s fetched before a reset", day)
                return False
            text = (text or "").strip() or DEFAULT_QUOTE
            return self.merge(day, text)
        finally:
            with self._guard:
                if self._in_flight.get(day) is asyncio.current_task():
                    del self._in_flight[day]


def _cancel_on_loop(task: asyncio.Task) -> bool:
    loop = task.get_loop()
    if loop.is_closed():
        return False
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None
    if running is loop:
        task.cancel()
    else:
        loop.call_soon_threadsafe(task.cancel)
    return True
