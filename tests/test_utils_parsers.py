"""Tests for utility parser functions."""

from __future__ import annotations

import base64
import json

import pytest

from app.utils.parsers import (
    collect_query_params,
    first_param,
    http_method,
    last_path_segment,
    read_body,
    read_json_body,
)


class TestHttpMethod:
    """Tests for http_method function."""

    def test_rest_event(self) -> None:
        assert http_method({'httpMethod': 'post'}) == 'POST'

    def test_http_api_event(self) -> None:
        event = {'requestContext': {'http': {'method': 'OPTIONS'}}}
        assert http_method(event) == 'OPTIONS'

    def test_defaults_to_get(self) -> None:
        assert http_method({}) == 'GET'


class TestReadBody:
    """Tests for read_body and read_json_body."""

    def test_missing_body_is_empty(self) -> None:
        assert read_body({'body': None}) == ''

    def test_plain_body(self) -> None:
        assert read_body({'body': 'a=b'}) == 'a=b'

    def test_base64_body(self) -> None:
        encoded = base64.b64encode('{"x": "ü"}'.encode('utf-8')).decode('ascii')
        event = {'body': encoded, 'isBase64Encoded': True}

        assert read_json_body(event) == {'x': 'ü'}

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            read_json_body({'body': '{'})


class TestLastPathSegment:
    """Tests for last_path_segment function."""

    def test_returns_final_segment(self) -> None:
        assert last_path_segment({'path': '/trackier-trigger/abc-123'}) == 'abc-123'

    def test_ignores_trailing_slash(self) -> None:
        assert last_path_segment({'path': '/trackier-trigger/abc/'}) == 'abc'

    def test_http_api_raw_path(self) -> None:
        assert last_path_segment({'rawPath': '/fn/xyz'}) == 'xyz'

    def test_root_path(self) -> None:
        assert last_path_segment({'path': '/'}) == ''


class TestFirstParam:
    """Tests for first_param function."""

    def test_returns_first_value(self) -> None:
        assert first_param({'path': ['/a', '/b']}, 'path') == '/a'

    def test_returns_none_for_missing_key(self) -> None:
        assert first_param({}, 'path') is None

    def test_returns_none_for_empty_list(self) -> None:
        assert first_param({'path': []}, 'path') is None


class TestCollectQueryParams:
    """Tests for collect_query_params function."""

    def test_single_value_params(self) -> None:
        event = {'queryStringParameters': {'path': '/api/x'}}
        assert collect_query_params(event) == {'path': ['/api/x']}

    def test_multi_value_params_win(self) -> None:
        event = {
            'queryStringParameters': {'path': '/last'},
            'multiValueQueryStringParameters': {'path': ['/first', '/last']},
        }
        assert collect_query_params(event) == {'path': ['/first', '/last']}

    def test_skips_none_values(self) -> None:
        event = {'queryStringParameters': {'path': None, 'id': '1'}}
        assert collect_query_params(event) == {'id': ['1']}

    def test_empty_event(self) -> None:
        assert collect_query_params({}) == {}
