"""SQLAlchemy models for the tables the edge functions touch."""

from app.db.models.daily_trace_count import DailyTraceCount
from app.db.models.enums import Role
from app.db.models.trace_override import TraceOverride
from app.db.models.user_profile import UserProfile

__all__ = [
    "DailyTraceCount",
    "Role",
    "TraceOverride",
    "UserProfile",
]
