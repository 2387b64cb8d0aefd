"""
Unit tests for the CORS responder and envelope builders.
"""

import json

from shared.errors import RateLimitedError, UpstreamError, ValidationError
from service_food_proxy.app.responses.envelope import (
    CORS_HEADERS,
    cors_response,
    error_response,
    json_response,
    not_found_response,
    passthrough_response,
)


def assert_cors(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, HEAD, POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"


class TestCorsResponder:
    """Test cases for cors_response."""

    def test_preflight_is_204_without_body(self):
        response = cors_response(None)
        assert response.status_code == 204
        assert response.body == b""
        assert_cors(response)

    def test_body_gives_200(self):
        response = cors_response("hello")
        assert response.status_code == 200
        assert response.body == b"hello"
        assert_cors(response)

    def test_header_set_is_exact(self):
        assert CORS_HEADERS == {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET, HEAD, POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
        }


class TestEnvelopes:
    """Test cases for JSON and plain-text envelopes."""

    def test_json_response_has_cors_and_content_type(self):
        response = json_response({"ok": True}, 201, {"X-Extra": "1"})
        assert response.status_code == 201
        assert response.headers["content-type"] == "application/json"
        assert response.headers["x-extra"] == "1"
        assert_cors(response)

    def test_passthrough_keeps_bytes(self):
        raw = b'{"foods": [], "weird":   "spacing"}'
        response = passthrough_response(raw, 200, 300)
        assert response.body == raw
        assert response.headers["content-type"] == "application/json"
        assert response.headers["cache-control"] == "s-maxage=300"
        assert_cors(response)

    def test_validation_error_body(self):
        response = error_response(ValidationError("Missing ?query parameter"))
        assert response.status_code == 400
        assert json.loads(response.body) == {"error": "Missing ?query parameter"}
        assert_cors(response)

    def test_upstream_error_carries_status(self):
        response = error_response(UpstreamError("USDA", 503))
        assert response.status_code == 502
        assert json.loads(response.body) == {"error": "USDA API error", "status": 503}

    def test_rate_limited_sets_retry_after(self):
        response = error_response(RateLimitedError(60))
        assert response.status_code == 429
        assert response.headers["retry-after"] == "60"
        assert json.loads(response.body) == {"error": "Rate limit exceeded"}

    def test_not_found_is_plain_text(self):
        response = not_found_response("nope")
        assert response.status_code == 404
        assert response.body == b"nope"
        assert response.headers["content-type"].startswith("text/plain")
        assert_cors(response)
