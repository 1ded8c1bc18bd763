"""Profile ledger: total points, streak, reset and avatar ingestion.

The counters are never bumped by individual mutations. ``refresh_profile``
recomputes both from the full record history, and ``reset_all`` zeroes them
together with the history.
"""

from __future__ import annotations

import base64
import logging
from datetime import date, timedelta
from typing import Mapping

from zenith.analytics import total_energy_harvest
from zenith.errors import AvatarError, ProfileError, ResetNotConfirmed
from zenith.models import AppState, DailyRecord, UserProfile
from zenith.rating import is_fully_completed

logger = logging.getLogger(__name__)


# ── Streak ────────────────────────────────────────────────────


def _counts_for_streak(record: DailyRecord | None) -> bool:
    if record is None:
        return False
    return is_fully_completed(record.total_points_earned, record.max_points_possible, len(record.tasks))


def compute_streak(records: Mapping[str, DailyRecord], today: str) -> int:
    """Consecutive fully-completed days ending today.

    Today still being in progress does not break the streak: if today is not
    complete yet, counting starts from yesterday.
    """
    try:
        day = date.fromisoformat(today)
    except ValueError:
        return 0
    if not _counts_for_streak(records.get(day.isoformat())):
        day -= timedelta(days=1)
    streak = 0
    while _counts_for_streak(records.get(day.isoformat())):
        streak += 1
        day -= timedelta(days=1)
    return streak


def refresh_profile(state: AppState, today: str) -> UserProfile:
    """Recompute totalPoints and streak from the whole history."""
    state.profile.total_points = total_energy_harvest(state.records)
    state.profile.streak = compute_streak(state.records, today)
    return state.profile


# ── Reset ─────────────────────────────────────────────────────


def reset_all(state: AppState, confirmed: bool = False) -> AppState:
    """Erase every record and zero the profile counters.

    Raises ResetNotConfirmed, before touching anything, unless *confirmed*.
    """
    if not confirmed:
        raise ResetNotConfirmed("Reset must be explicitly confirmed")
    erased = len(state.records)
    state.records = {}
    state.profile.total_points = 0
    state.profile.streak = 0
    logger.warning("History reset: %d records erased", erased)
    return state


# ── Profile edits ─────────────────────────────────────────────


_IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


def sniff_image_type(data: bytes) -> str | None:
    """Return the image MIME type from magic bytes, or None if not an image."""
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return mime
    return None


def set_avatar(state: AppState, data: bytes) -> str:
    """Store an uploaded image on the profile as a self-contained data URL."""
    mime = sniff_image_type(data)
    if mime is None:
        raise AvatarError("Uploaded file is not a supported image")
    encoded = base64.b64encode(data).decode("ascii")
    state.profile.avatar = f"data:{mime};base64,{encoded}"
    return state.profile.avatar


def rename_profile(state: AppState, name: str) -> UserProfile:
    name = (name or "").strip()
    if not name:
        raise ProfileError("Profile name must not be empty")
    state.profile.name = name
    return state.profile
