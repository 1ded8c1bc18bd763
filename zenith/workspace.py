"""Workspace root, settings, timezone and path helpers for Zenith."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from zenith.fileio import read_yaml

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the workspace root directory (contains zenith/state.json)."""
    return Path(
        os.environ.get("ZENITH_ROOT", str(Path.home() / "zenith"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def state_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "zenith" / "state.json"


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "zenith" / "settings.yaml"


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    timezone: str = "UTC"
    trend_days: int = 14
    reminder_hour: int = 23
    inspiration_timeout: float = 10.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            timezone=str(d.get("timezone", "UTC")),
            trend_days=int(d.get("trend_days", 14)),
            reminder_hour=int(d.get("reminder_hour", 23)),
            inspiration_timeout=float(d.get("inspiration_timeout", 10.0)),
        )


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml, falling back to defaults when missing or malformed."""
    try:
        return Settings.from_dict(read_yaml(settings_path(root)))
    except (yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning("Ignoring unreadable settings file: %s", e)
        return Settings()


def zone_for(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name, falling back to UTC."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", name)
        return ZoneInfo("UTC")


def now_in(timezone: str) -> datetime:
    """Current datetime in the named timezone."""
    return datetime.now(zone_for(timezone))


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    return now_in(load_settings(root).timezone).date().isoformat()


def is_reminder_due(now: datetime, reminder_hour: int = 23) -> bool:
    """True during the hour in which the end-of-day reminder should show."""
    return now.hour == reminder_hour
