"""Pytest configuration and fixtures for the edge function tests.

Database tests run against an in-memory SQLite engine created per test.
Outbound HTTP is faked by patching ``urllib.request.urlopen``.
"""

from __future__ import annotations

import io
import json
import sys
import urllib.error
from pathlib import Path
from typing import Any
from typing import Optional
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "backend" / "src"))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep handler configuration independent of the developer's shell."""
    for name in (
        "DATABASE_URL",
        "DATABASE_SECRET_ARN",
        "SERVICE_ROLE_KEY",
        "BACKEND_BASE_URL",
        "BACKEND_TIMEOUT_SECONDS",
        "JWT_SECRET",
        "JWT_AUDIENCE",
    ):
        monkeypatch.delenv(name, raising=False)


# --- Database Fixtures ---


@pytest.fixture
def test_engine():
    """Create a fresh in-memory database with all tables."""
    from sqlalchemy import create_engine
    from sqlalchemy.pool import StaticPool

    from app.db.base import Base
    from app.db import models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    """Session bound to the per-test engine."""
    from sqlalchemy.orm import Session

    with Session(test_engine) as session:
        yield session


@pytest.fixture
def profile_factory(db_session):
    """Insert a user profile and return its id as a string."""
    from app.db.models import UserProfile

    def create(role: str = "viewer") -> str:
        profile = UserProfile(id=uuid4(), email="user@example.com", role=role)
        db_session.add(profile)
        db_session.commit()
        return str(profile.id)

    return create


# --- API Event Fixtures ---


def make_event(
    method: str = "GET",
    path: str = "/",
    body: Optional[Any] = None,
    query: Optional[dict[str, str]] = None,
    headers: Optional[dict[str, str]] = None,
    claims: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Build an API Gateway (REST) proxy event."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "httpMethod": method,
        "path": path,
        "queryStringParameters": query,
        "multiValueQueryStringParameters": None,
        "headers": headers or {},
        "requestContext": {
            "requestId": str(uuid4()),
            "authorizer": {"claims": claims} if claims else {},
        },
        "body": body,
        "isBase64Encoded": False,
    }


@pytest.fixture
def api_gateway_event() -> dict[str, Any]:
    return make_event()


# --- Backend HTTP Fixtures ---


@pytest.fixture
def backend(mocker):
    """Patch ``urlopen`` and let tests choose what the backend answers.

    ``backend.reply(status, body)`` sets the response; statuses >= 400 are
    raised as ``HTTPError`` the way urllib does. ``backend.fail(exc)``
    makes the call raise. ``backend.urlopen`` exposes the mock.
    """
    urlopen = mocker.patch("urllib.request.urlopen")

    class FakeBackend:
        def __init__(self) -> None:
            self.urlopen = urlopen
            self.reply(200, "{}")

        def reply(self, status: int, body: str, headers: Optional[dict] = None) -> None:
            urlopen.side_effect = None
            if status >= 400:
                urlopen.side_effect = urllib.error.HTTPError(
                    "http://backend",
                    status,
                    "error",
                    headers or {},
                    io.BytesIO(body.encode("utf-8")),
                )
                return
            resp = MagicMock()
            resp.status = status
            resp.read.return_value = body.encode("utf-8")
            resp.getheaders.return_value = list((headers or {}).items())
            urlopen.return_value.__enter__.return_value = resp

        def fail(self, exc: BaseException) -> None:
            urlopen.side_effect = exc

        @property
        def request(self):
            """The ``urllib.request.Request`` of the last call."""
            return urlopen.call_args.args[0]

    return FakeBackend()


# --- Mock Fixtures ---


@pytest.fixture
def mock_boto3_client(mocker):
    """Mock boto3 client for AWS service calls."""
    return mocker.patch("boto3.client")
