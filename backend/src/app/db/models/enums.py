"""Enum definitions for database models."""

from __future__ import annotations

import enum


class Role(str, enum.Enum):
    """Authorization tier stored on a user profile.

    A user without a profile row has no role at all (``None``).
    """

    ADMIN = "admin"
    VIEWER = "viewer"
