"""Shared test fixtures for Zenith tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from zenith.models import AppState, TaskTemplate, UserProfile


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with settings and a small saved history."""
    root = tmp_path / "workspace"
    (root / "zenith").mkdir(parents=True)

    settings = {
        "timezone": "UTC",
        "trend_days": 7,
        "reminder_hour": 23,
        "inspiration_timeout": 5,
    }
    (root / "zenith" / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    state = {
        "profile": {"name": "Sam", "avatar": "", "totalPoints": 30, "streak": 1},
        "templates": [
            {"id": "1", "name": "Meditate", "points": 10},
            {"id": "2", "name": "Deep work", "points": 20},
        ],
        "records": {
            "2026-02-10": {
                "date": "2026-02-10",
                "tasks": [
                    {"id": "1", "name": "Meditate", "points": 10, "completed": True},
                    {"id": "2", "name": "Deep work", "points": 20, "completed": True},
                ],
                "totalPointsEarned": 30,
                "maxPointsPossible": 30,
                "reportComment": "Zenith Master!",
                "prayers": {"fajr": True, "dhuhr": False, "asr": False, "maghrib": False, "isha": False},
            }
        },
        "darkMode": False,
    }
    (root / "zenith" / "state.json").write_text(
        json.dumps(state, indent=2), encoding="utf-8"
    )

    os.environ["ZENITH_ROOT"] = str(root)
    yield root
    if "ZENITH_ROOT" in os.environ:
        del os.environ["ZENITH_ROOT"]


@pytest.fixture
def state() -> AppState:
    """In-memory state with a 50-point catalog (10 + 15 + 25) and no history."""
    return AppState(
        profile=UserProfile(name="Sam"),
        templates=[
            TaskTemplate(id="a", name="Meditate", points=10),
            TaskTemplate(id="b", name="Exercise", points=15),
            TaskTemplate(id="c", name="Deep work", points=25),
        ],
    )
