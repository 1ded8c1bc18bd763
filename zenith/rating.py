"""Progress percentage and report comment tiers for a day."""

from __future__ import annotations


EMPTY_CANVAS = "The canvas is empty, but the potential is infinite. Let's make a mark tomorrow. 🌙"
SEED_SOWER = "Seed sower. Every great journey begins with these first small, intentional steps. 🌱"
MOMENTUM_BUILDER = "Momentum builder. You're carving a path through the noise. Keep going. 🌊"
PEAK_PERFORMER = "Peak performer! You are breathing the rare air of high productivity. 🚀"
ZENITH_MASTER = "Zenith Master! Today, you achieved absolute alignment. You are unstoppable. 💎"


def progress_percent(earned: int, possible: int) -> float:
    """Share of possible points earned, 0-100. A zero denominator counts as 1."""
    return 100 * earned / (possible or 1)


def report_comment(earned: int, possible: int) -> str:
    """Pick the comment tier for a day's totals.

    0 -> empty canvas, (0, 30) -> seed sower, [30, 60) -> momentum builder,
    [60, 100) -> peak performer, 100 -> zenith master.
    """
    progress = progress_percent(earned, possible)
    if progress == 0:
        return EMPTY_CANVAS
    if progress < 30:
        return SEED_SOWER
    if progress < 60:
        return MOMENTUM_BUILDER
    if progress < 100:
        return PEAK_PERFORMER
    return ZENITH_MASTER


def is_fully_completed(earned: int, possible: int, task_count: int) -> bool:
    """A day counts as complete only with at least one task and 100% progress."""
    return task_count > 0 and progress_percent(earned, possible) >= 100
