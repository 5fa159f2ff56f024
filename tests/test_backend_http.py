"""Tests for the outbound backend HTTP client."""

from __future__ import annotations

import socket
import urllib.error

import pytest

from app.exceptions import UpstreamError
from app.services.backend_http import BackendClient


class TestBackendClient:
    def test_success_returns_status_body_headers(self, backend) -> None:
        backend.reply(200, '{"ok": true}', headers={"X-Trace": "1"})

        result = BackendClient().send("post", "http://b/api", body="{}")

        assert result.status == 200
        assert result.body == '{"ok": true}'
        assert result.headers == {"X-Trace": "1"}
        assert backend.request.get_method() == "POST"
        assert backend.request.data == b"{}"

    def test_http_error_is_a_result(self, backend) -> None:
        backend.reply(404, "missing")

        result = BackendClient().send("GET", "http://b/api")

        assert result.status == 404
        assert result.body == "missing"

    def test_transport_error_raises(self, backend) -> None:
        backend.fail(urllib.error.URLError(socket.gaierror("no such host")))

        with pytest.raises(UpstreamError) as exc_info:
            BackendClient().send("GET", "http://b/api")

        assert exc_info.value.status_code == 500
        assert exc_info.value.url == "http://b/api"

    def test_timeout_raises(self, backend) -> None:
        backend.fail(TimeoutError("timed out"))

        with pytest.raises(UpstreamError):
            BackendClient(timeout=1.5).send("GET", "http://b/api")

        assert backend.urlopen.call_args.kwargs == {"timeout": 1.5}

    def test_no_timeout_by_default(self, backend) -> None:
        BackendClient().send("GET", "http://b/api")

        assert backend.urlopen.call_args.kwargs == {}

    def test_rejects_non_http_scheme(self, backend) -> None:
        with pytest.raises(UpstreamError):
            BackendClient().send("GET", "file:///etc/passwd")

        backend.urlopen.assert_not_called()
