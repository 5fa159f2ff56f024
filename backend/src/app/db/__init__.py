"""Database utilities and models."""

from app.db.base import Base
from app.db.models import DailyTraceCount
from app.db.models import Role
from app.db.models import TraceOverride
from app.db.models import UserProfile

__all__ = [
    "Base",
    "DailyTraceCount",
    "Role",
    "TraceOverride",
    "UserProfile",
]
