"""Tracker session: owns one AppState and persists it after every change."""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from zenith import ledger, records, templates
from zenith.analytics import StatsSummary, archive, compute_stats
from zenith.inspiration import InspirationProvider, InspirationScheduler, StaticInspirationProvider
from zenith.models import AppState, DailyRecord, TaskTemplate, UserProfile
from zenith.store import load_state, save_state
from zenith.workspace import Settings, load_settings, now_in, workspace_root

logger = logging.getLogger(__name__)


class Tracker:
    """Single owner of the application state.

    Every mutation goes materialize -> engine op (which commits) ->
    profile refresh -> save. ``last_save`` holds the outcome of the most
    recent save so callers can warn that changes were not persisted.
    """

    def __init__(
        self,
        root: Path | None = None,
        provider: InspirationProvider | None = None,
        state: AppState | None = None,
    ):
        self.root = root if root is not None else workspace_root()
        self.settings: Settings = load_settings(self.root)
        if state is None:
            state = load_state(self.root)
        self.state = state if state is not None else templates.default_state()
        ledger.refresh_profile(self.state, self.today())
        self.last_save: dict[str, Any] = {"ok": True}
        # Sync API endpoints run on a threadpool.
        self._lock = threading.RLock()
        self.scheduler = InspirationScheduler(
            provider or StaticInspirationProvider(),
            self._merge_inspiration,
            timeout=self.settings.inspiration_timeout,
        )

    # ── Plumbing ──────────────────────────────────────────────

    def now(self) -> datetime:
        return now_in(self.settings.timezone)

    def today(self) -> str:
        return self.now().date().isoformat()

    def _persist(self) -> dict[str, Any]:
        ledger.refresh_profile(self.state, self.today())
        self.last_save = save_state(self.state, self.root)
        return self.last_save

    def _mutate(self, op, day: str, *args: Any) -> DailyRecord:
        with self._lock:
            record = records.materialize(self.state, day)
            result = op(self.state, record, *args)
            self._persist()
            return result

    # ── Reads ─────────────────────────────────────────────────

    def snapshot(self) -> dict[str, Any]:
        """Full state as JSON, with streak and totals current for today."""
        with self._lock:
            ledger.refresh_profile(self.state, self.today())
            return self.state.to_dict()

    def profile(self) -> dict[str, Any]:
        with self._lock:
            ledger.refresh_profile(self.state, self.today())
            return self.state.profile.to_dict()

    def view(self, day: str) -> DailyRecord:
        """The record for *day*; does not store anything."""
        with self._lock:
            return records.materialize(self.state, day)

    def stats(self) -> StatsSummary:
        with self._lock:
            return compute_stats(self.state.records, self.settings.trend_days)

    def archive(self) -> list[dict[str, Any]]:
        with self._lock:
            return archive(self.state.records)

    # ── Record mutations ──────────────────────────────────────

    def toggle_task(self, day: str, task_id: str) -> DailyRecord:
        return self._mutate(records.toggle_task, day, task_id)

    def edit_task(self, day: str, task_id: str, updates: dict[str, Any]) -> DailyRecord:
        return self._mutate(records.edit_task, day, task_id, updates)

    def add_task(
        self,
        day: str,
        name: str = records.NEW_TASK_NAME,
        points: int = records.NEW_TASK_POINTS,
    ) -> DailyRecord:
        return self._mutate(records.add_task, day, name, points)

    def delete_task(self, day: str, task_id: str) -> DailyRecord:
        return self._mutate(records.delete_task, day, task_id)

    def set_prayer(self, day: str, prayer: str, value: bool) -> DailyRecord:
        return self._mutate(records.set_prayer, day, prayer, value)

    def toggle_prayer(self, day: str, prayer: str) -> DailyRecord:
        return self._mutate(records.toggle_prayer, day, prayer)

    def set_quote(self, day: str, text: str) -> DailyRecord:
        return self._mutate(records.set_quote, day, text)

    # ── Catalog & profile ─────────────────────────────────────

    def replace_templates(self, catalog: list[dict[str, Any]]) -> list[TaskTemplate]:
        with self._lock:
            result = templates.replace_templates(self.state, catalog)
            self._persist()
            return result

    def rename(self, name: str) -> UserProfile:
        with self._lock:
            profile = ledger.rename_profile(self.state, name)
            self._persist()
            return profile

    def set_avatar(self, data: bytes) -> str:
        with self._lock:
            avatar = ledger.set_avatar(self.state, data)
            self._persist()
            return avatar

    def toggle_dark_mode(self) -> bool:
        with self._lock:
            self.state.dark_mode = not self.state.dark_mode
            self._persist()
            return self.state.dark_mode

    def reset(self, confirmed: bool = False) -> AppState:
        """Erase history and cancel pending inspiration fetches."""
        with self._lock:
            ledger.reset_all(self.state, confirmed)
            self._persist()
            self.scheduler.cancel_all()
            return self.state

    # ── Inspiration ───────────────────────────────────────────

    def request_inspiration(self, day: str) -> asyncio.Task | None:
        """Start a background quote fetch for *day* if it has no quote yet."""
        if self.view(day).custom_quote:
            return None
        return self.scheduler.request(day, self.state.profile.name)

    def _merge_inspiration(self, day: str, text: str) -> bool:
        with self._lock:
            applied = records.apply_inspiration(self.state, day, text)
            if applied:
                self._persist()
            return applied
