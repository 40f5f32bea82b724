"""
Tests for the MatcherClient HTTP layer.

Uses httpx.MockTransport, no network.
"""

import asyncio
import json

import httpx
import pytest

from promptdeck.services.matcher import MatcherClient, SearchFailure


def _client(handler, **kwargs):
    return MatcherClient(
        base_url="http://matcher.test/",
        endpoint="api/search",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestMatcherRequests:
    """Test request construction."""

    def test_posts_full_query(self, sample_payload):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=sample_payload)

        asyncio.run(_client(handler).search("template:email"))

        assert seen["method"] == "POST"
        assert seen["url"] == "http://matcher.test/api/search"
        assert seen["body"] == {"query": "template:email"}

    def test_parses_response(self, sample_payload):
        client = _client(lambda request: httpx.Response(200, json=sample_payload))
        response = asyncio.run(client.search("email"))
        assert response.items("template")[0].name == "Cold email"

    def test_from_settings(self):
        settings = {"matcher": {"base_url": "http://x.test", "endpoint": "/q", "timeout_s": 2}}
        client = MatcherClient.from_settings(settings)
        assert client.url == "http://x.test/q"
        assert client.timeout.read == 2.0


class TestMatcherFailures:
    """Every failure surfaces as SearchFailure."""

    def test_http_error_status(self):
        client = _client(lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(SearchFailure, match="500"):
            asyncio.run(client.search("email"))

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SearchFailure):
            asyncio.run(_client(handler).search("email"))

    def test_invalid_json(self):
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(SearchFailure, match="invalid JSON"):
            asyncio.run(client.search("email"))

    def test_non_object_payload(self):
        client = _client(lambda request: httpx.Response(200, json=["template"]))
        with pytest.raises(SearchFailure):
            asyncio.run(client.search("email"))

    def test_failure_chains_cause(self):
        client = _client(lambda request: httpx.Response(404))
        with pytest.raises(SearchFailure) as exc_info:
            asyncio.run(client.search("email"))
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
