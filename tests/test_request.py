"""Tests for build_request."""

import pytest

from logglysend.errors import ConfigurationError, EncodingError
from logglysend.request import (
    DEFAULT_ENDPOINT,
    TAG_HEADER,
    OutboundRequest,
    build_request,
)


class TestBuildRequest:
    def test_url_embeds_token(self):
        req = build_request(b"{}", frozenset(), "VALID")
        assert req.url == f"{DEFAULT_ENDPOINT}/inputs/VALID/"
        assert req.method == "POST"

    def test_custom_endpoint_trailing_slash(self):
        req = build_request(b"{}", frozenset(), "T", endpoint="http://localhost:8080/")
        assert req.url == "http://localhost:8080/inputs/T/"

    def test_token_quoted_as_path_segment(self):
        req = build_request(b"{}", frozenset(), "a/b c")
        assert req.url.endswith("/inputs/a%2Fb%20c/")

    def test_body_and_content_type(self):
        req = build_request(b'{"message": "x"}', frozenset(), "T")
        assert req.body == b'{"message": "x"}'
        assert req.headers["Content-Type"] == "application/json"

    def test_tag_header_comma_joined(self):
        req = build_request(b"{}", frozenset({"b", "a"}), "T")
        assert set(req.headers[TAG_HEADER].split(",")) == {"a", "b"}
        assert req.tags == "a,b"

    def test_no_tag_header_when_empty(self):
        req = build_request(b"{}", frozenset(), "T")
        assert TAG_HEADER not in req.headers
        assert req.tags is None

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_missing_token(self, token):
        with pytest.raises(ConfigurationError, match="token required"):
            build_request(b"{}", frozenset({"a"}), token)

    def test_request_is_frozen(self):
        req = build_request(b"{}", frozenset(), "T")
        assert isinstance(req, OutboundRequest)
        with pytest.raises(AttributeError):
            req.url = "http://elsewhere/"


class TestTagHeaderValues:
    def test_latin1_tag_allowed(self):
        req = build_request(b"{}", frozenset({"café"}), "T")
        assert req.tags == "café"

    @pytest.mark.parametrize("tag", ["café-✓", "日本", "a,b", "line\nbreak", "tab\there"])
    def test_unsendable_tag(self, tag):
        with pytest.raises(EncodingError):
            build_request(b"{}", frozenset({tag}), "T")

    def test_token_whitespace_stripped(self):
        req = build_request(b"{}", frozenset(), "  T  ")
        assert req.url.endswith("/inputs/T/")
