"""Typed dataclasses for the Zenith data model.

All models use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


PRAYER_NAMES = ("fajr", "dhuhr", "asr", "maghrib", "isha")


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class TaskTemplate:
    """A reusable task definition that seeds each new day."""

    id: str = ""
    name: str = ""
    points: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TaskTemplate:
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            points=int(d.get("points", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "points": self.points}


@dataclass
class TaskInstance:
    """A template's state for one specific day."""

    id: str = ""
    name: str = ""
    points: int = 0
    completed: bool = False

    @classmethod
    def from_template(cls, template: TaskTemplate) -> TaskInstance:
        return cls(id=template.id, name=template.name, points=template.points)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TaskInstance:
        return cls(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            points=int(d.get("points", 0)),
            completed=bool(d.get("completed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "points": self.points,
            "completed": self.completed,
        }


# ── Daily record ──────────────────────────────────────────────


@dataclass
class Prayers:
    fajr: bool = False
    dhuhr: bool = False
    asr: bool = False
    maghrib: bool = False
    isha: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Prayers:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(**{name: bool(d.get(name, False)) for name in PRAYER_NAMES})

    def to_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def count(self) -> int:
        return sum(1 for name in PRAYER_NAMES if getattr(self, name))


@dataclass
class DailyRecord:
    date: str = ""
    tasks: list[TaskInstance] = field(default_factory=list)
    total_points_earned: int = 0
    max_points_possible: int = 0
    custom_quote: str | None = None
    report_comment: str | None = None
    prayers: Prayers | None = None

    def find_task(self, task_id: str) -> TaskInstance | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailyRecord:
        prayers = d.get("prayers")
        return cls(
            date=str(d.get("date", "")),
            tasks=[TaskInstance.from_dict(t) for t in (d.get("tasks") or [])],
            total_points_earned=int(d.get("totalPointsEarned", 0) or 0),
            max_points_possible=int(d.get("maxPointsPossible", 0) or 0),
            custom_quote=d.get("customQuote"),
            report_comment=d.get("reportComment"),
            prayers=Prayers.from_dict(prayers) if isinstance(prayers, dict) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": self.date,
            "tasks": [t.to_dict() for t in self.tasks],
            "totalPointsEarned": self.total_points_earned,
            "maxPointsPossible": self.max_points_possible,
        }
        if self.custom_quote is not None:
            d["customQuote"] = self.custom_quote
        if self.report_comment is not None:
            d["reportComment"] = self.report_comment
        if self.prayers is not None:
            d["prayers"] = self.prayers.to_dict()
        return d


# ── Profile & app state ───────────────────────────────────────


@dataclass
class UserProfile:
    name: str = ""
    avatar: str = ""
    total_points: int = 0
    streak: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> UserProfile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            name=str(d.get("name", "")),
            avatar=str(d.get("avatar", "")),
            total_points=max(0, int(d.get("totalPoints", 0) or 0)),
            streak=max(0, int(d.get("streak", 0) or 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "avatar": self.avatar,
            "totalPoints": self.total_points,
            "streak": self.streak,
        }


@dataclass
class AppState:
    profile: UserProfile = field(default_factory=UserProfile)
    templates: list[TaskTemplate] = field(default_factory=list)
    records: dict[str, DailyRecord] = field(default_factory=dict)
    dark_mode: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AppState:
        if not d or not isinstance(d, dict):
            return cls()
        records = {}
        for key, rd in (d.get("records") or {}).items():
            if isinstance(rd, dict):
                record = DailyRecord.from_dict(rd)
                # The mapping key is authoritative for the record's date.
                record.date = key
                records[key] = record
        return cls(
            profile=UserProfile.from_dict(d.get("profile") or {}),
            templates=[TaskTemplate.from_dict(t) for t in (d.get("templates") or [])],
            records=records,
            dark_mode=bool(d.get("darkMode", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "templates": [t.to_dict() for t in self.templates],
            "records": {k: r.to_dict() for k, r in sorted(self.records.items())},
            "darkMode": self.dark_mode,
        }
