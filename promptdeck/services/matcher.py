"""
Matcher Client - Calls the remote semantic search endpoint.

Sends the full query text (prefix tokens included) and returns the
categorised matches as a SearchResponse:

  POST {base_url}{endpoint}
  {"query": "template: cover letter"}

  → {"template": [{"name": ..., "score": 0.93}, ...], "vault": [...], ...}

Ranking happens on the server; results are returned in the order received.
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from promptdeck.search.results import SearchResponse, parse_response


class SearchFailure(Exception):
    """Any transport, status or decoding problem while searching."""


class MatcherClient:
    """Async client for the semantic matcher."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        endpoint: str = "/api/search",
        timeout_s: float = 10.0,
        connect_timeout_s: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self.timeout = httpx.Timeout(float(timeout_s), connect=float(connect_timeout_s))
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "MatcherClient":
        matcher = settings.get("matcher", {})
        return cls(
            base_url=matcher.get("base_url", "http://localhost:8000"),
            endpoint=matcher.get("endpoint", "/api/search"),
            timeout_s=matcher.get("timeout_s", 10.0),
            connect_timeout_s=matcher.get("connect_timeout_s", 5.0),
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    async def search(self, query: str) -> SearchResponse:
        """
        Search the remote matcher.

        Args:
            query: Full query text, prefix tokens included

        Returns:
            Parsed SearchResponse

        Raises:
            SearchFailure: On any transport, HTTP status or payload error
        """
        logger.debug(f"POST {self.url} query='{query}'")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json={"query": query})
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise SearchFailure(f"Matcher returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SearchFailure(f"Matcher request failed: {e}") from e
        except ValueError as e:
            raise SearchFailure("Matcher returned invalid JSON") from e

        try:
            return parse_response(payload)
        except TypeError as e:
            raise SearchFailure(str(e)) from e
