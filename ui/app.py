from __future__ import annotations

import os
import secrets
from datetime import date
from typing import Any

from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi import Body
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from zenith import (
    DailyRecord,
    ResetNotConfirmed,
    Tracker,
    ZenithError,
    daily_dua,
    is_reminder_due,
)


app = FastAPI(title="Zenith API", version="0.1.0")

security = HTTPBasic(auto_error=False)

_tracker: Tracker | None = None


def get_tracker() -> Tracker:
    global _tracker
    if _tracker is None:
        _tracker = Tracker()
    return _tracker


# ── Auth ──────────────────────────────────────────────────────


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("ZENITH_USERNAME", "")
    expected_password = os.environ.get("ZENITH_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Helpers ───────────────────────────────────────────────────


def _check_day(day: str) -> str:
    try:
        return date.fromisoformat(day).isoformat()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {day}")


def _record_response(tracker: Tracker, record: DailyRecord) -> dict[str, Any]:
    return {
        "ok": True,
        "saved": tracker.last_save.get("ok", False),
        "record": record.to_dict(),
        "profile": tracker.profile(),
    }


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/state")
def api_get_state(tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Full state dump plus today's reminder flag."""
    now = tracker.now()
    return {
        "today": now.date().isoformat(),
        "reminderDue": is_reminder_due(now, tracker.settings.reminder_hour),
        "state": tracker.snapshot(),
    }


@app.get("/api/records/{day}")
async def api_get_record(day: str, tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """View a day. Kicks off a background inspiration fetch if it has no quote."""
    day = _check_day(day)
    record = tracker.view(day)
    tracker.request_inspiration(day)
    return {
        "record": record.to_dict(),
        "stored": day in tracker.state.records,
        "dua": daily_dua(day),
    }


@app.post("/api/records/{day}/tasks")
def api_add_task(day: str, payload: dict[str, Any] = Body(default={}), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _check_day(day)
    kwargs = {k: payload[k] for k in ("name", "points") if k in payload}
    try:
        record = tracker.add_task(day, **kwargs)
    except ZenithError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _record_response(tracker, record)


@app.post("/api/records/{day}/tasks/{task_id}/toggle")
def api_toggle_task(day: str, task_id: str, tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    record = tracker.toggle_task(_check_day(day), task_id)
    return _record_response(tracker, record)


@app.patch("/api/records/{day}/tasks/{task_id}")
def api_edit_task(day: str, task_id: str, payload: dict[str, Any] = Body(...), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _check_day(day)
    try:
        record = tracker.edit_task(day, task_id, payload)
    except ZenithError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _record_response(tracker, record)


@app.delete("/api/records/{day}/tasks/{task_id}")
def api_delete_task(day: str, task_id: str, tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    record = tracker.delete_task(_check_day(day), task_id)
    return _record_response(tracker, record)


@app.post("/api/records/{day}/prayers/{prayer}")
def api_set_prayer(day: str, prayer: str, payload: dict[str, Any] = Body(default={}), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Set a prayer flag, or toggle it when no "value" is given."""
    day = _check_day(day)
    try:
        if "value" in payload:
            record = tracker.set_prayer(day, prayer, bool(payload["value"]))
        else:
            record = tracker.toggle_prayer(day, prayer)
    except ZenithError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _record_response(tracker, record)


@app.put("/api/records/{day}/quote")
def api_set_quote(day: str, payload: dict[str, Any] = Body(...), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _check_day(day)
    if "text" not in payload:
        raise HTTPException(status_code=400, detail="Missing text")
    record = tracker.set_quote(day, str(payload["text"]))
    return _record_response(tracker, record)


@app.get("/api/stats")
def api_stats(tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    return tracker.stats().to_dict()


@app.get("/api/archive")
def api_archive(tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    rows = tracker.archive()
    return {"count": len(rows), "records": rows}


@app.put("/api/templates")
def api_replace_templates(payload: list[dict[str, Any]] = Body(...), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        catalog = tracker.replace_templates(payload)
    except ZenithError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "saved": tracker.last_save.get("ok", False), "templates": [t.to_dict() for t in catalog]}


@app.put("/api/profile/name")
def api_rename(payload: dict[str, Any] = Body(...), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        profile = tracker.rename(str(payload.get("name", "")))
    except ZenithError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "saved": tracker.last_save.get("ok", False), "profile": profile.to_dict()}


@app.post("/api/profile/avatar")
async def api_set_avatar(request: Request, tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Upload raw image bytes as the request body."""
    data = await request.body()
    try:
        tracker.set_avatar(data)
    except ZenithError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "saved": tracker.last_save.get("ok", False), "profile": tracker.profile()}


@app.post("/api/dark_mode")
def api_toggle_dark_mode(tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    dark = tracker.toggle_dark_mode()
    return {"ok": True, "saved": tracker.last_save.get("ok", False), "darkMode": dark}


@app.post("/api/reset")
def api_reset(payload: dict[str, Any] = Body(default={}), tracker: Tracker = Depends(get_tracker), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Erase all history. Requires {"confirm": true}."""
    try:
        tracker.reset(confirmed=payload.get("confirm") is True)
    except ResetNotConfirmed as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True, "saved": tracker.last_save.get("ok", False), "profile": tracker.profile()}
