"""Repository for UserProfile entities."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import UserProfile
from app.db.repositories.base import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile]):
    """Read access to user profiles."""

    def __init__(self, session: Session):
        super().__init__(session, UserProfile)

    def get_role(self, user_id: UUID | str) -> Optional[str]:
        """Return the stored role for a user, or None without a profile.

        Raises:
            ValueError: If ``user_id`` is not a UUID.
            sqlalchemy.exc.MultipleResultsFound: If more than one row matches.
        """
        query = select(UserProfile.role).where(UserProfile.id == _to_uuid(user_id))
        return self._session.execute(query).scalar_one_or_none()


def _to_uuid(value: UUID | str) -> UUID:
    """Normalize a UUID value from str or UUID."""
    if isinstance(value, UUID):
        return value
    return UUID(str(value))
