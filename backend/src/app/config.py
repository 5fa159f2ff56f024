"""Immutable runtime configuration for the edge functions.

Settings are read from the environment once per invocation and passed
into handlers explicitly. Nothing here is mutated after construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Mapping
from typing import Optional
from urllib.parse import urlsplit
from urllib.parse import urlunsplit

from app.db.connection import get_database_url
from app.db.connection import get_service_role_key

DEFAULT_BACKEND_BASE_URL = (
    "http://url-tracker-proxy-alb-1426409269.us-east-1.elb.amazonaws.com"
)

DEFAULT_CORS_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": (
            "authorization, x-client-info, apikey, content-type"
        ),
    }
)


@dataclass(frozen=True)
class ProxySettings:
    """Settings shared by every forwarding handler.

    Attributes:
        backend_base_url: Plain-HTTP base URL of the backend load balancer.
        timeout: Outbound timeout in seconds; ``None`` waits indefinitely.
        cors_headers: Headers attached to every response.
    """

    backend_base_url: str = DEFAULT_BACKEND_BASE_URL
    timeout: Optional[float] = None
    cors_headers: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_CORS_HEADERS
    )

    @classmethod
    def from_env(cls) -> "ProxySettings":
        """Build settings from ``BACKEND_BASE_URL`` and ``BACKEND_TIMEOUT_SECONDS``."""
        raw_timeout = os.getenv("BACKEND_TIMEOUT_SECONDS", "").strip()
        return cls(
            backend_base_url=(
                os.getenv("BACKEND_BASE_URL") or DEFAULT_BACKEND_BASE_URL
            ).rstrip("/"),
            timeout=float(raw_timeout) if raw_timeout else None,
        )

    def base_url(self, port: Optional[int] = None) -> str:
        """Return the backend base URL, optionally pinned to ``port``.

        Only the port changes; userinfo and bracketed IPv6 hosts are kept.
        """
        if port is None:
            return self.backend_base_url
        parts = urlsplit(self.backend_base_url)
        userinfo, _, host = parts.netloc.rpartition("@")
        if parts.port is not None:
            host = host.rsplit(":", 1)[0]
        netloc = f"{userinfo}@{host}:{port}" if userinfo else f"{host}:{port}"
        return urlunsplit((parts.scheme, netloc, parts.path, "", ""))

    def cors_for(self, methods: Optional[str] = None) -> dict[str, str]:
        """Return a copy of the CORS headers, narrowing allowed methods."""
        headers = dict(self.cors_headers)
        if methods:
            headers["Access-Control-Allow-Methods"] = methods
        return headers


@dataclass(frozen=True)
class DatabaseSettings:
    """Credentials for the handlers that talk to the database directly."""

    database_url: str
    service_role_key: str = field(repr=False)

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Resolve both secrets.

        Raises:
            ConfigurationError: If either secret is missing.
        """
        return cls(
            database_url=get_database_url(),
            service_role_key=get_service_role_key(),
        )
