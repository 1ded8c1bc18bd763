"""Exception types raised by the Zenith core."""

from __future__ import annotations


class ZenithError(Exception):
    """Base class for all Zenith errors."""


class RecordError(ZenithError):
    """A record mutation was given invalid input (bad points, unknown prayer)."""


class TemplateError(ZenithError):
    """A template catalog failed validation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class ProfileError(ZenithError):
    """A profile edit was given invalid input."""


class AvatarError(ProfileError):
    """Uploaded avatar data is not a recognised image."""


class ResetNotConfirmed(ZenithError):
    """A destructive reset was requested without confirmation."""
