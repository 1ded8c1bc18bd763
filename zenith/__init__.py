"""Zenith core library: daily records, statistics and the profile ledger.

Public API re-exports for convenient imports:
    from zenith import Tracker, materialize, commit, compute_stats, ...
"""

# Errors
from zenith.errors import (
    ZenithError,
    RecordError,
    TemplateError,
    ProfileError,
    AvatarError,
    ResetNotConfirmed,
)

# Models
from zenith.models import (
    PRAYER_NAMES,
    TaskTemplate,
    TaskInstance,
    Prayers,
    DailyRecord,
    UserProfile,
    AppState,
)

# Template catalog
from zenith.templates import (
    DEFAULT_TEMPLATES,
    default_state,
    validate_template,
    validate_templates,
    replace_templates,
)

# Rating
from zenith.rating import (
    progress_percent,
    report_comment,
    is_fully_completed,
)

# Daily record engine
from zenith.records import (
    materialize,
    commit,
    toggle_task,
    edit_task,
    add_task,
    delete_task,
    set_prayer,
    toggle_prayer,
    set_quote,
    apply_inspiration,
)

# Statistics
from zenith.analytics import (
    StatsSummary,
    average_score,
    highest_score,
    trend_series,
    efficiency_quotient,
    total_energy_harvest,
    milestone_days,
    archive,
    compute_stats,
)

# Ledger
from zenith.ledger import (
    compute_streak,
    refresh_profile,
    reset_all,
    set_avatar,
    rename_profile,
)

# Persistence & workspace
from zenith.store import load_state, save_state
from zenith.workspace import (
    Settings,
    load_settings,
    workspace_root,
    state_path,
    settings_path,
    zone_for,
    now_in,
    today_str,
    is_reminder_due,
)

# Inspiration
from zenith.inspiration import (
    DEFAULT_QUOTE,
    InspirationScheduler,
    StaticInspirationProvider,
    daily_dua,
)

# Session
from zenith.session import Tracker
