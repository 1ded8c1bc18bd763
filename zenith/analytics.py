"""Statistics over the full record history.

Everything here is a pure fold over ``state.records`` and is recomputed on
every read; nothing is cached.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from zenith.models import DailyRecord
from zenith.rating import progress_percent


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _sorted(records: Mapping[str, DailyRecord]) -> list[DailyRecord]:
    # Zero-padded ISO keys sort lexically in date order.
    return [records[k] for k in sorted(records)]


def average_score(records: Mapping[str, DailyRecord]) -> int:
    if not records:
        return 0
    return _round_half_up(sum(r.total_points_earned for r in records.values()) / len(records))


def highest_score(records: Mapping[str, DailyRecord]) -> int:
    return max((r.total_points_earned for r in records.values()), default=0)


def trend_series(records: Mapping[str, DailyRecord], n: int = 14) -> list[tuple[str, int]]:
    """Last *n* records by ascending date as (date, points earned)."""
    if n <= 0:
        return []
    return [(r.date, r.total_points_earned) for r in _sorted(records)[-n:]]


def efficiency_quotient(records: Mapping[str, DailyRecord]) -> int:
    """Mean per-day completion ratio as a rounded percentage."""
    if not records:
        return 0
    ratios = [r.total_points_earned / (r.max_points_possible or 1) for r in records.values()]
    return _round_half_up(sum(ratios) / len(ratios) * 100)


def total_energy_harvest(records: Mapping[str, DailyRecord]) -> int:
    return sum(r.total_points_earned for r in records.values())


def is_milestone(record: DailyRecord) -> bool:
    return record.max_points_possible > 0 and record.total_points_earned >= record.max_points_possible


def milestone_days(records: Mapping[str, DailyRecord]) -> int:
    return sum(1 for r in records.values() if is_milestone(r))


def archive(records: Mapping[str, DailyRecord]) -> list[dict[str, Any]]:
    """History listing, newest day first."""
    rows = []
    for r in reversed(_sorted(records)):
        rows.append({
            "date": r.date,
            "totalPointsEarned": r.total_points_earned,
            "maxPointsPossible": r.max_points_possible,
            "progress": round(progress_percent(r.total_points_earned, r.max_points_possible), 1),
            "milestone": is_milestone(r),
            "prayersDone": r.prayers.count() if r.prayers is not None else 0,
        })
    return rows


# ── Summary ───────────────────────────────────────────────────


@dataclass
class StatsSummary:
    average_score: int = 0
    highest_score: int = 0
    trend: list[tuple[str, int]] = field(default_factory=list)
    efficiency_quotient: int = 0
    total_energy_harvest: int = 0
    milestone_days: int = 0
    total_days_tracked: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageScore": self.average_score,
            "highestScore": self.highest_score,
            "trend": [{"date": d, "points": p} for d, p in self.trend],
            "efficiencyQuotient": self.efficiency_quotient,
            "totalEnergyHarvest": self.total_energy_harvest,
            "milestoneDays": self.milestone_days,
            "totalDaysTracked": self.total_days_tracked,
        }


def compute_stats(records: Mapping[str, DailyRecord], trend_days: int = 14) -> StatsSummary:
    """Bundle every rollup into one summary."""
    return StatsSummary(
        average_score=average_score(records),
        highest_score=highest_score(records),
        trend=trend_series(records, trend_days),
        efficiency_quotient=efficiency_quotient(records),
        total_energy_harvest=total_energy_harvest(records),
        milestone_days=milestone_days(records),
        total_days_tracked=len(records),
    )
