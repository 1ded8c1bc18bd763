"""Task template catalog: defaults, validation and wholesale replacement."""

from __future__ import annotations

import logging
from typing import Any

from zenith.errors import TemplateError
from zenith.models import AppState, TaskTemplate, UserProfile

logger = logging.getLogger(__name__)


DEFAULT_TEMPLATES: tuple[TaskTemplate, ...] = (
    TaskTemplate(id="1", name="Morning Meditation", points=10),
    TaskTemplate(id="2", name="Deep Work (2 Hours)", points=20),
    TaskTemplate(id="3", name="Physical Exercise", points=15),
    TaskTemplate(id="4", name="Read 10 Pages", points=10),
    TaskTemplate(id="5", name="Healthy Meal Prep", points=15),
    TaskTemplate(id="6", name="Evening Review", points=5),
)

DEFAULT_PROFILE_NAME = "Alex Rivera"
DEFAULT_AVATAR = "https://picsum.photos/id/64/200/200"


def default_state() -> AppState:
    """Fresh application state used when nothing has been persisted yet."""
    return AppState(
        profile=UserProfile(name=DEFAULT_PROFILE_NAME, avatar=DEFAULT_AVATAR),
        templates=[TaskTemplate(t.id, t.name, t.points) for t in DEFAULT_TEMPLATES],
        records={},
        dark_mode=False,
    )


# ── Validation ────────────────────────────────────────────────


def validate_template(template: dict[str, Any]) -> list[str]:
    """Validate a single template dict and return list of errors (empty if valid)."""
    errors = []
    if not str(template.get("id", "")).strip():
        errors.append("Missing required field: id")
    if not str(template.get("name", "")).strip():
        errors.append("Missing required field: name")
    points = template.get("points")
    if isinstance(points, bool) or not isinstance(points, int):
        errors.append("points must be an integer")
    elif points < 0:
        errors.append("points must be >= 0")
    return errors


def validate_templates(templates: list[dict[str, Any]]) -> list[str]:
    """Validate a whole catalog, including id uniqueness."""
    errors = []
    seen: set[str] = set()
    for i, t in enumerate(templates):
        if not isinstance(t, dict):
            errors.append(f"Template #{i} must be an object")
            continue
        errors.extend(f"Template #{i}: {e}" for e in validate_template(t))
        tid = str(t.get("id", ""))
        if tid in seen:
            errors.append(f"Duplicate template id: {tid}")
        seen.add(tid)
    return errors


def replace_templates(state: AppState, templates: list[dict[str, Any]]) -> list[TaskTemplate]:
    """Replace the catalog. Existing records keep their own task instances."""
    errors = validate_templates(templates)
    if errors:
        raise TemplateError(errors)
    state.templates = [TaskTemplate.from_dict(t) for t in templates]
    logger.info("Template catalog replaced (%d templates)", len(state.templates))
    return state.templates
