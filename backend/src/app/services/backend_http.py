"""Outbound HTTP client for the backend load balancer.

The edge functions run behind HTTPS while the load balancer only speaks
plain HTTP, so browsers cannot call it directly. This client performs a
single request and hands the status, body and headers back untouched.

HTTP error statuses are *results*, not failures: a 503 from the backend
comes back as ``BackendResponse(status=503, ...)``. Only transport
problems such as a refused connection or a timeout raise
``UpstreamError``.
"""

from __future__ import annotations

import urllib.error
import urllib.request
from dataclasses import dataclass
from dataclasses import field
from typing import Mapping
from typing import Optional
from urllib.parse import urlparse

from app.exceptions import UpstreamError
from app.utils.logging import get_logger

logger = get_logger(__name__)

JSON_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class BackendResponse:
    """Status, body and headers returned by the backend."""

    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)


class BackendClient:
    """Issue one request per call; no retries, no connection reuse."""

    def __init__(self, timeout: Optional[float] = None):
        self._timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        body: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> BackendResponse:
        """Send ``method url`` with an optional UTF-8 body.

        Raises:
            UpstreamError: On an unsupported URL scheme or transport failure.
        """
        if urlparse(url).scheme not in ("http", "https"):
            raise UpstreamError("Only http and https URLs are allowed", url=url)

        encoded_body = body.encode("utf-8") if body is not None else None
        request = urllib.request.Request(
            url,
            data=encoded_body,
            headers=dict(headers if headers is not None else JSON_HEADERS),
            method=method.upper(),
        )

        logger.info(f"Forwarding {method.upper()} {url}")

        kwargs = {} if self._timeout is None else {"timeout": self._timeout}
        try:
            with urllib.request.urlopen(request, **kwargs) as resp:  # nosec B310 - scheme checked above
                return BackendResponse(
                    status=resp.status,
                    body=resp.read().decode("utf-8", errors="replace"),
                    headers=dict(resp.getheaders()),
                )
        except urllib.error.HTTPError as exc:
            return BackendResponse(
                status=exc.code,
                body=_read_error_body(exc),
                headers=dict(exc.headers) if exc.headers else {},
            )
        except (urllib.error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", None) or exc
            logger.warning(f"Backend request failed: {type(exc).__name__}: {reason}")
            raise UpstreamError(str(reason), url=url) from exc


def _read_error_body(exc: urllib.error.HTTPError) -> str:
    """Read the body of an HTTP error response; empty if unreadable."""
    try:
        return exc.read().decode("utf-8", errors="replace")
    except OSError:
        return ""
