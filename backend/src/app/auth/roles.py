"""Resolve the caller's authorization role from their user profile.

``RoleResolver`` fetches the role once on ``start()`` and again on every
auth state change, until ``close()`` drops the subscription. It never
raises to its caller: a missing profile, a failed query and an
unrecognised role value all resolve to ``None``.

Usage::

    with RoleResolver(auth_client, make_profile_lookup(engine)) as roles:
        if roles.is_admin:
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.auth.session import AuthClient
from app.auth.session import AuthSubscription
from app.auth.session import AuthUser
from app.db.models import Role
from app.db.repositories import UserProfileRepository
from app.utils.logging import get_logger
from app.utils.logging import mask_pii

logger = get_logger(__name__)

RoleLookup = Callable[[str], Optional[str]]

_KNOWN_ROLES = frozenset(role.value for role in Role)


@dataclass(frozen=True)
class RoleState:
    """Snapshot of what the resolver currently knows."""

    role: Optional[str]
    loading: bool

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_viewer(self) -> bool:
        return self.role == Role.VIEWER.value


def make_profile_lookup(engine: Engine) -> RoleLookup:
    """Return a lookup reading ``user_profiles.role`` in a fresh session."""

    def lookup(user_id: str) -> Optional[str]:
        with Session(engine) as session:
            return UserProfileRepository(session).get_role(user_id)

    return lookup


class RoleResolver:
    """Keep the current user's role in sync with the auth state.

    Fetches are not de-duplicated: overlapping triggers each write the
    state and the last write wins.
    """

    def __init__(
        self,
        auth_client: AuthClient,
        lookup_role: RoleLookup,
        on_change: Optional[Callable[[RoleState], None]] = None,
    ):
        self._auth = auth_client
        self._lookup_role = lookup_role
        self._on_change = on_change
        self._subscription: Optional[AuthSubscription] = None
        self._state = RoleState(role=None, loading=True)

    def __enter__(self) -> "RoleResolver":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def role(self) -> Optional[str]:
        return self._state.role

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def is_admin(self) -> bool:
        return self._state.is_admin

    @property
    def is_viewer(self) -> bool:
        return self._state.is_viewer

    def state(self) -> RoleState:
        return self._state

    def start(self) -> None:
        """Fetch once and subscribe to auth state changes."""
        self.refetch()
        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(self._handle_auth_event)

    def close(self) -> None:
        """Drop the auth subscription; safe to call more than once."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def refetch(self) -> Optional[str]:
        """Re-read the role for the current user and return it."""
        role = self._resolve()
        self._set_state(RoleState(role=role, loading=False))
        return role

    def _handle_auth_event(self, event: str, _user: Optional[AuthUser]) -> None:
        logger.debug(f"Auth state changed: {event}")
        self.refetch()

    def _resolve(self) -> Optional[str]:
        try:
            user = self._auth.get_user()
        except Exception:
            logger.exception("Error fetching current user")
            return None

        if user is None:
            return None

        try:
            role = self._lookup_role(user.id)
        except Exception as exc:
            logger.error(
                "Error fetching role",
                extra={
                    "user": mask_pii(user.id),
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return None

        if role is None:
            logger.info(f"No profile for user {mask_pii(user.id)}")
            return None

        if role not in _KNOWN_ROLES:
            logger.warning(
                "Unknown role value, treating as no role",
                extra={"user": mask_pii(user.id), "role": role},
            )
            return None

        return role

    def _set_state(self, state: RoleState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
