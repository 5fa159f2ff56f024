"""Identity and role resolution."""

from app.auth.roles import RoleResolver
from app.auth.roles import RoleState
from app.auth.roles import make_profile_lookup
from app.auth.session import AuthUser
from app.auth.session import SessionAuthClient
from app.auth.session import user_from_event

__all__ = [
    "AuthUser",
    "RoleResolver",
    "RoleState",
    "SessionAuthClient",
    "make_profile_lookup",
    "user_from_event",
]
