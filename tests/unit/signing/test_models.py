"""Unit tests for RequestParams."""

import pytest
from pydantic import ValidationError

from sigv4_render.signing import RequestParams


class TestRequestParams:
    """Tests for request parameter parsing."""

    def test_requires_uri_or_url(self):
        with pytest.raises(ValidationError):
            RequestParams.model_validate({"method": "GET"})

    def test_defaults(self):
        params = RequestParams.model_validate({"url": "https://example.com"})
        assert params.method == "GET"
        assert params.headers == {}
        assert params.body is None
        assert params.json_payload is None

    def test_uri_wins(self):
        params = RequestParams(uri="https://a.example.com/x", url="https://b.example.com/y")
        assert params.target == "https://a.example.com/x"

    def test_json_alias(self):
        params = RequestParams.model_validate({"url": "https://e.com", "json": {"a": 1}})
        assert params.json_payload == {"a": 1}

    def test_extra_keys_kept(self):
        params = RequestParams.model_validate({"url": "https://e.com", "timeout": 5})
        assert params.model_extra == {"timeout": 5}

    @pytest.mark.parametrize(
        "url,path",
        [
            ("https://example.com", "/"),
            ("https://example.com/items", "/items"),
            ("https://example.com/items?q=1&b=2", "/items?q=1&b=2"),
        ],
    )
    def test_path(self, url, path):
        assert RequestParams(url=url).path == path

    @pytest.mark.parametrize(
        "url,host",
        [
            ("https://example.com/x", "example.com"),
            ("https://example.com:443/x", "example.com"),
            ("http://example.com:80/x", "example.com"),
            ("https://example.com:8443/x", "example.com:8443"),
            ("http://localhost:3000", "localhost:3000"),
        ],
    )
    def test_host(self, url, host):
        assert RequestParams(url=url).host == host
