"""Identity side of role resolution: users, auth events, subscriptions.

``SessionAuthClient`` is a small in-process auth client. It holds the
current user and notifies subscribers whenever the user signs in or out,
which is all ``RoleResolver`` needs from an identity provider.

SECURITY NOTES:
- Bearer tokens are only trusted after signature verification
- Authorizer claims are trusted because API Gateway verified them
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Protocol

import jwt

from app.auth.authorizer_helpers import extract_token
from app.utils.logging import get_logger
from app.utils.logging import mask_pii

logger = get_logger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthCallback = Callable[[str, Optional["AuthUser"]], None]


@dataclass(frozen=True)
class AuthUser:
    """Identity record owned by the auth provider; only ``id`` is read."""

    id: str
    email: Optional[str] = None


class AuthSubscription(Protocol):
    def unsubscribe(self) -> None: ...


class AuthClient(Protocol):
    """What the role resolver needs from an identity provider."""

    def get_user(self) -> Optional[AuthUser]: ...

    def on_auth_state_change(self, callback: AuthCallback) -> AuthSubscription: ...


class _Subscription:
    """Handle returned by ``SessionAuthClient.on_auth_state_change``."""

    def __init__(self, client: "SessionAuthClient", callback: AuthCallback):
        self._client = client
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._client._remove(self._callback)


class SessionAuthClient:
    """In-process auth client emitting ``SIGNED_IN`` / ``SIGNED_OUT``."""

    def __init__(self, user: Optional[AuthUser] = None):
        self._user = user
        self._callbacks: list[AuthCallback] = []
        self._lock = threading.Lock()

    def get_user(self) -> Optional[AuthUser]:
        return self._user

    def on_auth_state_change(self, callback: AuthCallback) -> AuthSubscription:
        with self._lock:
            self._callbacks.append(callback)
        return _Subscription(self, callback)

    def sign_in(self, user: AuthUser) -> None:
        self._user = user
        self._emit(SIGNED_IN)

    def sign_out(self) -> None:
        self._user = None
        self._emit(SIGNED_OUT)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def _remove(self, callback: AuthCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _emit(self, event: str) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(event, self._user)


def user_from_event(
    event: Mapping[str, Any],
    jwt_secret: Optional[str] = None,
) -> Optional[AuthUser]:
    """Identify the caller of an API Gateway request.

    Authorizer claims win. Without them, a bearer token is accepted if it
    verifies against ``jwt_secret`` (default ``JWT_SECRET``). Anything
    else yields None, which resolves to no role.
    """
    authorizer = event.get("requestContext", {}).get("authorizer") or {}
    claims = authorizer.get("claims") or {}
    sub = claims.get("sub") or authorizer.get("userSub")
    if sub:
        return AuthUser(id=str(sub), email=claims.get("email") or None)

    token = extract_token(event.get("headers") or {})
    secret = jwt_secret or os.getenv("JWT_SECRET")
    if not token or not secret:
        return None

    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=os.getenv("JWT_AUDIENCE", "authenticated"),
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        logger.info(f"Bearer token rejected: {type(exc).__name__}")
        return None

    logger.debug(f"Bearer token accepted for {mask_pii(str(decoded['sub']))}")
    return AuthUser(id=str(decoded["sub"]), email=decoded.get("email"))
