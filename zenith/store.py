"""Persistence gateway: whole-state JSON snapshots."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from zenith.fileio import read_json, write_json_atomic
from zenith.models import AppState
from zenith.workspace import state_path, workspace_root

logger = logging.getLogger(__name__)


def load_state(root: Path | None = None) -> AppState | None:
    """Load the persisted snapshot, or None when nothing usable is stored."""
    if root is None:
        root = workspace_root()
    path = state_path(root)
    try:
        data = read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s, starting fresh: %s", path, e)
        return None
    if not data:
        return None
    try:
        return AppState.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.warning("Malformed state in %s, starting fresh: %s", path, e)
        return None


def save_state(state: AppState, root: Path | None = None) -> dict[str, Any]:
    """Write the full snapshot atomically.

    Failures are reported, not raised: the in-memory state stays authoritative.
    """
    if root is None:
        root = workspace_root()
    path = state_path(root)
    try:
        write_json_atomic(path, state.to_dict())
    except OSError as e:
        logger.warning("Changes not saved to %s: %s", path, e)
        return {"ok": False, "reason": "write-failed", "error": str(e)}
    return {"ok": True, "path": str(path)}
