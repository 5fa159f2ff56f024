"""Repository pattern implementations for database operations."""

from app.db.repositories.base import BaseRepository
from app.db.repositories.maintenance import MaintenanceRepository
from app.db.repositories.maintenance import TraceDateMigration
from app.db.repositories.trace_override import TraceOverrideRepository
from app.db.repositories.user_profile import UserProfileRepository

__all__ = [
    "BaseRepository",
    "MaintenanceRepository",
    "TraceDateMigration",
    "TraceOverrideRepository",
    "UserProfileRepository",
]
