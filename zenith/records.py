"""Daily record engine for Zenith.

Reading a day is pure: ``materialize`` synthesizes a record from the
template catalog without storing it. Every mutation works on a copy of the
materialized record and finishes through ``commit``, which is the only place
derived fields are written and the only path into ``state.records``.
"""

from __future__ import annotations

import copy
import logging
import uuid
from typing import Any

from zenith.errors import RecordError
from zenith.models import PRAYER_NAMES, AppState, DailyRecord, Prayers, TaskInstance
from zenith.rating import report_comment

logger = logging.getLogger(__name__)

NEW_TASK_NAME = "New Objective 💎"
NEW_TASK_POINTS = 10


def _check_points(points: Any) -> int:
    if isinstance(points, bool) or not isinstance(points, int):
        raise RecordError("points must be an integer")
    if points < 0:
        raise RecordError("points must be >= 0")
    return points


# ── Read / write phases ───────────────────────────────────────


def materialize(state: AppState, day: str) -> DailyRecord:
    """Return the record for *day*, synthesizing one from templates if absent.

    Never mutates *state*. The result is a copy, so callers can edit it freely
    and hand it back through a mutation.
    """
    stored = state.records.get(day)
    if stored is not None:
        return copy.deepcopy(stored)
    return DailyRecord(
        date=day,
        tasks=[TaskInstance.from_template(t) for t in state.templates],
        total_points_earned=0,
        max_points_possible=sum(t.points for t in state.templates),
        prayers=Prayers(),
    )


def commit(state: AppState, record: DailyRecord) -> DailyRecord:
    """Recompute derived fields and store the record at its date key."""
    record.total_points_earned = sum(t.points for t in record.tasks if t.completed)
    record.max_points_possible = sum(t.points for t in record.tasks)
    record.report_comment = report_comment(record.total_points_earned, record.max_points_possible)
    state.records[record.date] = record
    logger.debug(
        "Committed %s: %d/%d", record.date, record.total_points_earned, record.max_points_possible
    )
    return record


# ── Task mutations ────────────────────────────────────────────


def toggle_task(state: AppState, record: DailyRecord, task_id: str) -> DailyRecord:
    """Flip completion of one task. Unknown ids leave everything untouched."""
    updated = copy.deepcopy(record)
    task = updated.find_task(task_id)
    if task is None:
        logger.debug("toggle_task: no task %s on %s", task_id, record.date)
        return record
    task.completed = not task.completed
    return commit(state, updated)


def edit_task(state: AppState, record: DailyRecord, task_id: str, updates: dict[str, Any]) -> DailyRecord:
    """Merge name/points into one task. Points changes affect this record only."""
    updated = copy.deepcopy(record)
    task = updated.find_task(task_id)
    if task is None:
        logger.debug("edit_task: no task %s on %s", task_id, record.date)
        return record
    if "points" in updates:
        task.points = _check_points(updates["points"])
    if "name" in updates:
        task.name = str(updates["name"])
    return commit(state, updated)


def new_task_id(record: DailyRecord) -> str:
    """Random short id that is unique within *record*."""
    existing = {t.id for t in record.tasks}
    while True:
        task_id = uuid.uuid4().hex[:12]
        if task_id not in existing:
            return task_id


def add_task(
    state: AppState,
    record: DailyRecord,
    name: str = NEW_TASK_NAME,
    points: int = NEW_TASK_POINTS,
) -> DailyRecord:
    """Append an ad-hoc task to the day with a fresh id."""
    points = _check_points(points)
    updated = copy.deepcopy(record)
    updated.tasks.append(TaskInstance(id=new_task_id(updated), name=str(name), points=points))
    return commit(state, updated)


def delete_task(state: AppState, record: DailyRecord, task_id: str) -> DailyRecord:
    """Remove one task from the day. The template catalog is not affected."""
    if record.find_task(task_id) is None:
        logger.debug("delete_task: no task %s on %s", task_id, record.date)
        return record
    updated = copy.deepcopy(record)
    updated.tasks = [t for t in updated.tasks if t.id != task_id]
    return commit(state, updated)


# ── Prayers & quote ───────────────────────────────────────────


def _check_prayer(prayer: str) -> str:
    if prayer not in PRAYER_NAMES:
        raise RecordError(f"Unknown prayer: {prayer}")
    return prayer


def set_prayer(state: AppState, record: DailyRecord, prayer: str, value: bool) -> DailyRecord:
    _check_prayer(prayer)
    updated = copy.deepcopy(record)
    if updated.prayers is None:
        updated.prayers = Prayers()
    setattr(updated.prayers, prayer, bool(value))
    return commit(state, updated)


def toggle_prayer(state: AppState, record: DailyRecord, prayer: str) -> DailyRecord:
    _check_prayer(prayer)
    current = getattr(record.prayers, prayer) if record.prayers is not None else False
    return set_prayer(state, record, prayer, not current)


def set_quote(state: AppState, record: DailyRecord, text: str) -> DailyRecord:
    """Store a user-entered quote verbatim; it wins over any pending inspiration."""
    updated = copy.deepcopy(record)
    updated.custom_quote = text
    return commit(state, updated)


def apply_inspiration(state: AppState, day: str, text: str) -> bool:
    """Set a fetched quote on *day* only if the current record has none yet.

    Returns False (and changes nothing) when a quote already landed first.
    """
    current = state.records.get(day)
    if current is not None and current.custom_quote:
        logger.debug("Discarding late inspiration for %s", day)
        return False
    record = materialize(state, day)
    record.custom_quote = text
    commit(state, record)
    return True
