"""Tests for role resolution."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy.exc import OperationalError

from app.auth.roles import RoleResolver
from app.auth.roles import RoleState
from app.auth.roles import make_profile_lookup
from app.auth.session import AuthUser
from app.auth.session import SessionAuthClient


def _failing_lookup(user_id: str):
    raise OperationalError("SELECT", {}, Exception("connection reset"))


class TestRoleResolution:
    def test_no_user_resolves_to_none(self, test_engine) -> None:
        resolver = RoleResolver(SessionAuthClient(), make_profile_lookup(test_engine))

        assert resolver.refetch() is None
        assert resolver.loading is False

    def test_user_without_profile_resolves_to_none(self, test_engine) -> None:
        client = SessionAuthClient(AuthUser(id=str(uuid4())))
        resolver = RoleResolver(client, make_profile_lookup(test_engine))

        assert resolver.refetch() is None

    def test_stored_role_is_returned_unchanged(self, test_engine, profile_factory) -> None:
        for role in ("admin", "viewer"):
            user_id = profile_factory(role)
            client = SessionAuthClient(AuthUser(id=user_id))

            resolver = RoleResolver(client, make_profile_lookup(test_engine))

            assert resolver.refetch() == role

    def test_query_error_matches_missing_row(self, test_engine) -> None:
        client = SessionAuthClient(AuthUser(id=str(uuid4())))
        missing = RoleResolver(client, make_profile_lookup(test_engine))
        failing = RoleResolver(client, _failing_lookup)

        missing.refetch()
        failing.refetch()

        assert missing.state() == failing.state() == RoleState(role=None, loading=False)

    def test_non_uuid_user_id_fails_closed(self, test_engine) -> None:
        client = SessionAuthClient(AuthUser(id="not-a-uuid"))
        resolver = RoleResolver(client, make_profile_lookup(test_engine))

        assert resolver.refetch() is None

    def test_unknown_role_value_fails_closed(self) -> None:
        client = SessionAuthClient(AuthUser(id="u1"))
        resolver = RoleResolver(client, lambda user_id: "superuser")

        assert resolver.refetch() is None

    def test_auth_client_error_fails_closed(self) -> None:
        class BrokenClient(SessionAuthClient):
            def get_user(self):
                raise RuntimeError("auth service unavailable")

        resolver = RoleResolver(BrokenClient(), lambda user_id: "admin")

        assert resolver.refetch() is None


class TestFlags:
    def test_admin_flags(self) -> None:
        resolver = RoleResolver(SessionAuthClient(AuthUser(id="u")), lambda _: "admin")
        resolver.refetch()

        assert resolver.is_admin is True
        assert resolver.is_viewer is False

    def test_viewer_flags(self) -> None:
        resolver = RoleResolver(SessionAuthClient(AuthUser(id="u")), lambda _: "viewer")
        resolver.refetch()

        assert resolver.is_admin is False
        assert resolver.is_viewer is True

    def test_loading_until_first_fetch(self) -> None:
        resolver = RoleResolver(SessionAuthClient(), lambda _: None)

        assert resolver.loading is True
        resolver.start()
        assert resolver.loading is False


class TestSubscription:
    def test_start_fetches_and_subscribes(self) -> None:
        calls: list[str] = []
        client = SessionAuthClient(AuthUser(id="u1"))

        def lookup(user_id: str):
            calls.append(user_id)
            return "viewer"

        resolver = RoleResolver(client, lookup)
        resolver.start()

        assert calls == ["u1"]
        assert client.subscriber_count == 1

    def test_auth_events_trigger_refetch(self) -> None:
        roles = {"u1": "viewer", "u2": "admin"}
        client = SessionAuthClient()
        seen: list[RoleState] = []

        with RoleResolver(client, roles.get, on_change=seen.append) as resolver:
            assert resolver.role is None
            client.sign_in(AuthUser(id="u2"))
            assert resolver.role == "admin"
            client.sign_out()
            assert resolver.role is None

        assert [state.role for state in seen] == [None, "admin", None]

    def test_close_unsubscribes(self) -> None:
        calls: list[str] = []
        client = SessionAuthClient(AuthUser(id="u1"))
        resolver = RoleResolver(client, lambda user_id: calls.append(user_id))

        resolver.start()
        resolver.close()
        resolver.close()
        client.sign_in(AuthUser(id="u2"))

        assert calls == ["u1"]
        assert client.subscriber_count == 0

    def test_start_twice_subscribes_once(self) -> None:
        client = SessionAuthClient()
        resolver = RoleResolver(client, lambda _: None)

        resolver.start()
        resolver.start()

        assert client.subscriber_count == 1
